"""QR code generation for card fronts."""

import concurrent.futures
import logging
import os
from io import BytesIO
from typing import Callable, Sequence

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from songcards.errors import EncodingError

logger = logging.getLogger(__name__)

_DEFAULT_MAX_WORKERS = 8

Encoder = Callable[[str], bytes]


def encode_link(text: str, dark: str = "#000000", transparent: bool = True) -> bytes:
    """
    Encode text as a QR code PNG.

    Args:
        text: Payload, usually a track URL.
        dark: Color of the dark modules.
        transparent: Leave light modules transparent instead of white.

    Returns:
        PNG bytes.
    """
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=10, border=2)
    qr.add_data(text)
    qr.make(fit=True)

    back_color = "transparent" if transparent else "white"
    img = qr.make_image(fill_color=dark, back_color=back_color)

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def encode_all(
    links: Sequence[str],
    encoder: Encoder = encode_link,
    max_workers: int | None = None,
) -> list[bytes | None]:
    """
    Encode every non-empty link concurrently.

    Each link is an independent task. All results are collected before
    returning; if any task fails, outstanding tasks are cancelled and the
    whole batch fails.

    Args:
        links: Payloads in card order. Empty strings get no code.
        encoder: Function turning one payload into image bytes.
        max_workers: Thread pool size. Defaults to min(cpu count, 8).

    Returns:
        Image bytes aligned with ``links`` (None where the link was empty).

    Raises:
        EncodingError: If any single encoding fails.
    """
    results: list[bytes | None] = [None] * len(links)
    pending = [(index, link) for index, link in enumerate(links) if link]
    if not pending:
        return results

    workers = max_workers or min(os.cpu_count() or 1, _DEFAULT_MAX_WORKERS)
    workers = max(1, min(workers, len(pending)))
    logger.info(f"Encoding {len(pending)} QR codes with {workers} worker(s)")

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(encoder, link): index for index, link in pending}
        done, not_done = concurrent.futures.wait(
            futures, return_when=concurrent.futures.FIRST_EXCEPTION
        )

        failed = [future for future in done if future.exception() is not None]
        if failed:
            for future in not_done:
                future.cancel()
            future = min(failed, key=lambda f: futures[f])
            index = futures[future]
            raise EncodingError(
                f"Failed to encode QR code for card {index + 1} ({links[index]!r}): {future.exception()}"
            ) from future.exception()

        for future in done:
            results[futures[future]] = future.result()

    return results
