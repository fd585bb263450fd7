"""Sheet pagination and duplex rendering."""

import math
import random
from pathlib import Path

import pytest
from pypdf import PdfReader

from conftest import make_tracks, png_bytes
from recording import back_cards, front_cards
from songcards.api.models import TrackRecord
from songcards.config import Layout, Theme
from songcards.design.grid import GridGeometry
from songcards.errors import ConfigurationError, DrawingError, EncodingError
from songcards.render.pdf import SheetRenderer, paginate
from songcards.utils.dimensions import A4


def render_recorded(tracks, recorder, theme, encoder, **kwargs):
    renderer = SheetRenderer(
        theme=theme, encoder=encoder, surface_factory=recorder, rng=random.Random(1), **kwargs
    )
    renderer.render(tracks)
    return recorder.surfaces[-1]


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("count", [1, 7, 11, 12, 13, 24, 25, 100])
def test_paginate_counts(count: int) -> None:
    tracks = make_tracks(count)
    sheets = paginate(tracks, [None] * count, 12)

    assert len(sheets) == math.ceil(count / 12)
    assert [sheet.index for sheet in sheets] == list(range(len(sheets)))
    for sheet in sheets[:-1]:
        assert len(sheet.tracks) == 12
    assert len(sheets[-1].tracks) == (count % 12 or 12)
    assert [t for sheet in sheets for t in sheet.tracks] == tracks


def test_paginate_empty() -> None:
    assert paginate([], [], 12) == []


def test_seven_tracks_make_one_sheet(recorder, plain_theme, fake_encoder) -> None:
    surface = render_recorded(make_tracks(7), recorder, plain_theme, fake_encoder)

    assert len(surface.pages) == 2
    assert len(front_cards(surface.pages[0])) == 7
    assert len(back_cards(surface.pages[1])) == 7
    assert surface.finished


def test_pages_alternate_front_and_back(recorder, plain_theme, fake_encoder) -> None:
    tracks = make_tracks(30)
    surface = render_recorded(tracks, recorder, plain_theme, fake_encoder)

    assert len(surface.pages) == 6
    for sheet_index in range(3):
        front = front_cards(surface.pages[2 * sheet_index])
        back = back_cards(surface.pages[2 * sheet_index + 1])
        expected = tracks[sheet_index * 12:(sheet_index + 1) * 12]
        assert [card.code is not None for card in front] == [True] * len(expected)
        assert [card.text(2) for card in back] == [t.title for t in expected]


def test_no_tracks_no_pages(recorder, plain_theme, fake_encoder) -> None:
    surface = render_recorded([], recorder, plain_theme, fake_encoder)
    assert surface.pages == []
    assert fake_encoder.seen == []


# ---------------------------------------------------------------------------
# Mirror invariant
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "layout",
    [Layout(), Layout(card_width_mm=50, card_height_mm=50, gap_mm=1, margin_mm=3, columns=4, rows=5)],
)
def test_front_and_back_cells_carry_same_track(recorder, plain_theme, layout: Layout) -> None:
    tracks = make_tracks(layout.cards_per_page + 5)
    codes = [png_bytes(i) for i in range(len(tracks))]
    renderer = SheetRenderer(layout=layout, theme=plain_theme, surface_factory=recorder)
    renderer.render(tracks, codes)
    surface = recorder.surfaces[-1]
    grid = GridGeometry.from_layout(layout)

    for sheet_index in range(len(surface.pages) // 2):
        front = front_cards(surface.pages[2 * sheet_index])
        back = back_cards(surface.pages[2 * sheet_index + 1])
        assert len(front) == len(back)

        for idx, (front_card, back_card) in enumerate(zip(front, back)):
            track = tracks[sheet_index * layout.cards_per_page + idx]
            assert front_card.rect == grid.front_rect(idx)
            assert back_card.rect == grid.back_rect(idx)
            assert codes.index(front_card.code) == tracks.index(track)
            assert back_card.text(0) == track.artist
            assert back_card.text(1) == track.year
            assert back_card.text(2) == track.title

            row, col = grid.position(idx)
            back_row = round((back_card.rect.y - grid.margin) / (grid.card_height + grid.gap))
            back_col = round((back_card.rect.x - grid.margin) / (grid.card_width + grid.gap))
            assert (back_row, back_col) == (row, layout.columns - 1 - col)


def test_duplicate_tracks_land_on_mirrored_columns(recorder, plain_theme) -> None:
    track = TrackRecord(artist="A", year="1999", title="T", link="http://x")
    filler = TrackRecord(artist="B", year="2000", title="U", link="http://y")
    codes = [png_bytes(1), png_bytes(2), png_bytes(1)]
    renderer = SheetRenderer(theme=plain_theme, surface_factory=recorder)
    renderer.render([track, filler, track], codes)
    surface = recorder.surfaces[-1]
    grid = GridGeometry.from_layout(Layout())

    back = back_cards(surface.pages[1])
    assert back[0].rect == grid.cell_rect(0, 2)
    assert back[2].rect == grid.cell_rect(0, 0)
    assert back[0].rect.y == back[2].rect.y
    assert back[0].text(2) == back[2].text(2) == "T"


# ---------------------------------------------------------------------------
# Front face
# ---------------------------------------------------------------------------


def test_code_is_inset_and_centered(recorder, plain_theme, fake_encoder) -> None:
    surface = render_recorded(make_tracks(1), recorder, plain_theme, fake_encoder)
    card = front_cards(surface.pages[0])[0]
    padding = Layout().code_padding

    assert card.code_rect.x >= card.rect.x + padding - 1e-9
    assert card.code_rect.right <= card.rect.right - padding + 1e-9
    # Square code in a square box fills it exactly
    assert card.code_rect.width == pytest.approx(card.rect.width - 2 * padding)
    assert card.code_rect.x + card.code_rect.width / 2 == pytest.approx(card.rect.x + card.rect.width / 2)
    assert card.code_rect.y + card.code_rect.height / 2 == pytest.approx(card.rect.y + card.rect.height / 2)


def test_empty_link_skips_code_only(recorder, plain_theme, fake_encoder) -> None:
    tracks = make_tracks(3)
    tracks[1] = TrackRecord(title="Local File", artist="Someone", year="", link="")
    surface = render_recorded(tracks, recorder, plain_theme, fake_encoder)

    front = front_cards(surface.pages[0])
    assert [card.code is not None for card in front] == [True, False, True]
    assert front[1].background == plain_theme.fallback_background
    assert len(fake_encoder.seen) == 2

    back = back_cards(surface.pages[1])
    assert back[1].text(1) == ""
    assert back[1].text(2) == "Local File"


def test_missing_background_falls_back_to_flat_fill(recorder, fake_encoder, tmp_path: Path) -> None:
    theme = Theme(background_image=Path("img/missing.png"), artist_font=None, year_font=None, title_font=None)
    surface = render_recorded(make_tracks(2), recorder, theme, fake_encoder, base_dir=tmp_path)

    assert [card.background for card in front_cards(surface.pages[0])] == ["#f0f0f0", "#f0f0f0"]


def test_background_image_covers_card(recorder, fake_encoder, tmp_path: Path) -> None:
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "qr_bg.png").write_bytes(png_bytes(7, size=(300, 200)))
    theme = Theme(artist_font=None, year_font=None, title_font=None)

    surface = render_recorded(make_tracks(2), recorder, theme, fake_encoder, base_dir=tmp_path)

    images = [call for call in surface.pages[0] if call[0] == "image" and not call[3]]
    assert len(images) == 2
    grid = GridGeometry.from_layout(Layout())
    # Stretched to the exact card rectangle, not aspect-fitted
    assert images[0][2] == grid.front_rect(0)
    assert images[1][2] == grid.front_rect(1)


def test_corrupt_background_is_fatal(recorder, fake_encoder, tmp_path: Path) -> None:
    (tmp_path / "bg.png").write_bytes(b"not an image")
    theme = Theme(background_image=Path("bg.png"), artist_font=None, year_font=None, title_font=None)
    renderer = SheetRenderer(theme=theme, encoder=fake_encoder, surface_factory=recorder, base_dir=tmp_path)

    with pytest.raises(DrawingError):
        renderer.render(make_tracks(1))


def test_frames_drawn_on_both_faces(recorder, fake_encoder, plain_theme) -> None:
    theme = plain_theme.model_copy(update={"draw_frames": True})
    surface = render_recorded(make_tracks(4), recorder, theme, fake_encoder)

    for page in surface.pages:
        assert sum(1 for call in page if call[0] == "stroke") == 4


# ---------------------------------------------------------------------------
# Back face
# ---------------------------------------------------------------------------


def test_back_colors_come_from_palette(recorder, plain_theme, fake_encoder) -> None:
    surface = render_recorded(make_tracks(24), recorder, plain_theme, fake_encoder)
    colors = [card.color for page in surface.pages[1::2] for card in back_cards(page)]
    assert len(colors) == 24
    assert set(colors) <= set(plain_theme.palette)


def test_back_colors_reproducible_with_seed(plain_theme, fake_encoder, recorder) -> None:
    tracks = make_tracks(12)

    def colors(seed: int) -> list[str]:
        renderer = SheetRenderer(
            theme=plain_theme, encoder=fake_encoder, surface_factory=recorder, rng=random.Random(seed)
        )
        renderer.render(tracks)
        return [card.color for card in back_cards(recorder.surfaces[-1].pages[1])]

    assert colors(5) == colors(5)
    assert colors(5) != colors(6)


def test_back_text_fonts_and_placement(recorder, plain_theme, fake_encoder) -> None:
    tracks = [
        TrackRecord(title="Short", artist="Artist", year="1985", link="https://x/1"),
        TrackRecord(
            title=" ".join(["An Extremely Long Title That Keeps Wrapping"] * 5),
            artist="Artist",
            year="1999",
            link="https://x/2",
        ),
    ]
    surface = render_recorded(tracks, recorder, plain_theme, lambda link: png_bytes(0))
    layout = Layout()

    for card in back_cards(surface.pages[1]):
        year_y = card.rect.y + card.rect.height / 2 - plain_theme.year_size / 2
        assert card.texts[0][2:] == ("Helvetica", plain_theme.artist_size)
        assert card.texts[1][2:] == ("Helvetica-Bold", plain_theme.year_size)
        assert card.texts[2][2:] == ("Helvetica", plain_theme.title_size)
        assert card.y(0) == pytest.approx(card.rect.y + layout.padding_y + plain_theme.artist_offset)
        assert card.y(1) == pytest.approx(year_y)
        assert card.y(2) >= year_y + plain_theme.year_size + plain_theme.title_gap - 1e-9

    short, long = back_cards(surface.pages[1])
    # One-line title hugs the bottom padding
    line_height = plain_theme.title_size * plain_theme.leading_ratio
    assert short.y(2) == pytest.approx(short.rect.bottom - layout.padding_y - line_height)
    # Many-line title is pushed just below the year
    year_y = long.rect.y + long.rect.height / 2 - plain_theme.year_size / 2
    assert long.y(2) == pytest.approx(year_y + plain_theme.year_size + plain_theme.title_gap)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


def test_bad_layout_fails_before_drawing(recorder, plain_theme, fake_encoder) -> None:
    renderer = SheetRenderer(
        layout=Layout(columns=5), theme=plain_theme, encoder=fake_encoder, surface_factory=recorder
    )
    with pytest.raises(ConfigurationError):
        renderer.render(make_tracks(3))
    assert recorder.surfaces == []
    assert fake_encoder.seen == []


def test_encoding_failure_aborts_before_drawing(recorder, plain_theme) -> None:
    def encoder(link: str) -> bytes:
        if link.endswith("3"):
            raise RuntimeError("boom")
        return png_bytes(0)

    renderer = SheetRenderer(theme=plain_theme, encoder=encoder, surface_factory=recorder)
    with pytest.raises(EncodingError):
        renderer.render(make_tracks(6))
    assert recorder.surfaces == []


def test_code_count_must_match_tracks(recorder, plain_theme) -> None:
    renderer = SheetRenderer(theme=plain_theme, surface_factory=recorder)
    with pytest.raises(ValueError):
        renderer.render(make_tracks(3), [png_bytes(0)])


# ---------------------------------------------------------------------------
# Real PDF output
# ---------------------------------------------------------------------------


def test_pdf_output_pages_and_size(tmp_path: Path, plain_theme) -> None:
    renderer = SheetRenderer(theme=plain_theme, rng=random.Random(3))
    output = renderer.render_to_file(make_tracks(13), tmp_path / "cards.pdf")

    reader = PdfReader(output)
    assert len(reader.pages) == 4
    for page in reader.pages:
        assert float(page.mediabox.width) == pytest.approx(A4.width, abs=0.01)
        assert float(page.mediabox.height) == pytest.approx(A4.height, abs=0.01)

    back_text = reader.pages[1].extract_text()
    assert "Song 0" in back_text
    assert "1960" in back_text


def test_failed_render_writes_no_file(tmp_path: Path, plain_theme) -> None:
    def encoder(link: str) -> bytes:
        raise RuntimeError("encoder down")

    renderer = SheetRenderer(theme=plain_theme, encoder=encoder)
    output = tmp_path / "cards.pdf"
    with pytest.raises(EncodingError):
        renderer.render_to_file(make_tracks(2), output)
    assert not output.exists()
