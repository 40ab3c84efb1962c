import json
import pytest
from src.slides.deck import Slide, SlideDeck
from src.slides.library import (
    SlideLibrary,
    SlideError,
    UnsupportedFileError,
    FileTooLargeError,
    SlideNotFoundError,
)


def make_deck(n=3):
    return SlideDeck([Slide(id=f"s{i}", name=f"Slide {i}", image_path=f"{i}.png") for i in range(n)])


@pytest.fixture
def library(tmp_path):
    lib = SlideLibrary(tmp_path / "presentations", title="Demo")
    lib.initialize()
    return lib


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "intro.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16)
    return path


# Deck navigation

def test_start_and_navigate():
    deck = make_deck(3)
    deck.start()

    assert deck.is_playing
    assert deck.current_slide.id == "s0"
    assert deck.next_slide()
    assert deck.next_slide()
    assert deck.current_index == 2
    # Clamped at the last slide
    assert not deck.next_slide()
    assert deck.current_index == 2


def test_previous_clamped_at_first():
    deck = make_deck(2)
    deck.start()

    assert not deck.previous_slide()
    assert deck.current_index == 0
    assert deck.is_first


def test_go_to_ignores_out_of_range():
    deck = make_deck(3)

    assert deck.go_to(2)
    assert not deck.go_to(3)
    assert not deck.go_to(-1)
    assert deck.current_index == 2
    assert deck.is_last


def test_end_rewinds():
    deck = make_deck(3)
    deck.start()
    deck.next_slide()
    deck.end()

    assert not deck.is_playing
    assert deck.current_index == 0


def test_start_from_chosen_slide():
    deck = make_deck(3)
    deck.start(deck.index_of("s2"))

    assert deck.is_playing
    assert deck.current_slide.id == "s2"
    assert deck.is_last


def test_start_out_of_range_falls_back_to_first():
    deck = make_deck(3)
    deck.go_to(1)
    deck.start(deck.index_of("missing"))

    assert deck.index_of("missing") == -1
    assert deck.current_index == 0


# Library

def test_initialize_creates_index(library):
    data = json.loads(library.index_path.read_text(encoding="utf-8"))

    assert data == {"title": "Demo", "slides": []}
    assert library.list_slides() == []


def test_initialize_keeps_existing_index(library):
    library.index_path.write_text(json.dumps({"title": "Kept", "slides": []}), encoding="utf-8")
    library.initialize()

    assert library.title == "Kept"


def test_add_slide_copies_file_and_updates_index(library, image):
    slide = library.add_slide(image)

    assert slide.id.startswith("slide-")
    assert slide.name == "intro"
    data = json.loads(library.index_path.read_text(encoding="utf-8"))
    entry = data["slides"][0]
    assert entry["id"] == slide.id
    assert entry["title"] == "intro"
    assert entry["image"].startswith("slide-") and entry["image"].endswith(".png")
    assert (library.directory / entry["image"]).read_bytes() == image.read_bytes()


def test_add_slide_with_title_and_unique_ids(library, image):
    first = library.add_slide(image, title="Opening")
    second = library.add_slide(image)

    assert first.name == "Opening"
    assert first.id != second.id
    assert [s.id for s in library.list_slides()] == [first.id, second.id]


def test_add_slide_preserves_non_ascii_title(library, image):
    library.add_slide(image, title="プレゼン")

    assert "プレゼン" in library.index_path.read_text(encoding="utf-8")


def test_add_pptx_accepted(library, tmp_path):
    deck_file = tmp_path / "talk.pptx"
    deck_file.write_bytes(b"PK")

    slide = library.add_slide(deck_file)
    assert slide.image_path.endswith(".pptx")


def test_add_unsupported_file(library, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")

    with pytest.raises(UnsupportedFileError):
        library.add_slide(path)
    assert library.list_slides() == []


def test_add_too_large(tmp_path, image):
    lib = SlideLibrary(tmp_path / "presentations", max_file_size=4)
    lib.initialize()

    with pytest.raises(FileTooLargeError):
        lib.add_slide(image)


def test_add_missing_file(library, tmp_path):
    with pytest.raises(SlideError):
        library.add_slide(tmp_path / "nope.png")


def test_add_recovers_from_corrupt_index(library, image):
    library.index_path.write_text("{not json", encoding="utf-8")

    slide = library.add_slide(image)
    assert [s.id for s in library.list_slides()] == [slide.id]


def test_remove_slide(library, image):
    slide = library.add_slide(image)
    stored = library.directory / json.loads(library.index_path.read_text(encoding="utf-8"))["slides"][0]["image"]

    library.remove_slide(slide.id)

    assert library.list_slides() == []
    assert not stored.exists()


def test_remove_slide_with_missing_image(library, image, capsys):
    slide = library.add_slide(image)
    for path in library.directory.glob("slide-*"):
        path.unlink()

    library.remove_slide(slide.id)

    assert library.list_slides() == []
    assert "Could not delete" in capsys.readouterr().out


def test_remove_unknown_slide(library):
    with pytest.raises(SlideNotFoundError):
        library.remove_slide("slide-0")


def test_load_deck(library, image):
    library.add_slide(image, title="One")
    library.add_slide(image, title="Two")

    deck = library.load_deck()

    assert deck.title == "Demo"
    assert [s.name for s in deck.slides] == ["One", "Two"]
    assert deck.slides[0].image_path.startswith(str(library.directory))


def test_reorder(library, image):
    ids = [library.add_slide(image, title=t).id for t in ("A", "B", "C")]

    library.reorder([ids[2], ids[0], ids[1]])

    assert [s.name for s in library.list_slides()] == ["C", "A", "B"]
    assert [s.name for s in library.load_deck().slides] == ["C", "A", "B"]


def test_reorder_rejects_unknown_or_partial(library, image):
    ids = [library.add_slide(image).id for _ in range(2)]

    with pytest.raises(SlideNotFoundError):
        library.reorder([ids[0], "slide-0"])
    with pytest.raises(SlideError):
        library.reorder([ids[0]])
    with pytest.raises(SlideError):
        library.reorder([ids[0], ids[0]])
    assert [s.id for s in library.list_slides()] == ids


def test_remove_all(library, image):
    library.add_slide(image)
    library.add_slide(image)

    assert library.remove_all() == 2
    assert library.list_slides() == []
    assert library.title == "Demo"
    assert list(library.directory.glob("slide-*")) == []


# Command line

def run_cli(tmp_path, *args):
    import main
    return main.main([
        "--config", str(tmp_path / "missing.yaml"),
        "--slides-dir", str(tmp_path / "cli"),
        *args,
    ])


def test_cli_reorder_and_clear(tmp_path, image, capsys):
    assert run_cli(tmp_path, "--add", str(image), "--title", "First") == 0
    assert run_cli(tmp_path, "--add", str(image), "--title", "Second") == 0
    lib = SlideLibrary(tmp_path / "cli")
    ids = [s.id for s in lib.list_slides()]

    assert run_cli(tmp_path, "--reorder", ids[1], ids[0]) == 0
    assert [s.name for s in lib.list_slides()] == ["Second", "First"]

    assert run_cli(tmp_path, "--reorder", ids[0]) == 1
    assert "ERROR" in capsys.readouterr().out

    assert run_cli(tmp_path, "--clear") == 0
    assert lib.list_slides() == []
