import pytest
from genma import config
from genma.core.config import CanvasConfig
from genma.core.element import Element, ElementKind
from genma.core.store import ElementStore
from genma.doceditor.editor import DocEditor
from genma.workbench.canvas import PointerEvent, Tool
from genma.workbench.canvas.session import Drawing


@pytest.fixture
def editor():
    return DocEditor(config=CanvasConfig())


def test_add_element_defaults(editor):
    editor.set_tool(Tool.HAND)
    rect = editor.add_element(ElementKind.RECTANGLE)
    text = editor.add_element(ElementKind.TEXT)
    frame = editor.add_element(ElementKind.FRAME)

    assert rect.rect() == (100, 100, 100, 100)
    assert rect.name == "Rectangle 1"
    assert rect.fill == "#333333"

    assert text.rect() == (120, 120, 200, 50)
    assert text.content == "Double click to edit"
    assert text.fill == "#ffffff"
    assert text.font_size == 16

    assert frame.rect() == (140, 140, 400, 300)
    assert frame.fill == "transparent"

    assert editor.selection.current() == [frame.id]
    assert editor.tool == Tool.CURSOR


def test_names_count_per_kind(editor):
    editor.add_element(ElementKind.RECTANGLE)
    editor.add_element(ElementKind.ELLIPSE)
    second = editor.add_element(ElementKind.RECTANGLE)
    assert second.name == "Rectangle 2"


def test_delete_selected(editor):
    a = editor.add_element(ElementKind.RECTANGLE)
    b = editor.add_element(ElementKind.ELLIPSE)
    editor.selection.set([a.id, b.id])

    removed = editor.delete_selected()

    assert {e.id for e in removed} == {a.id, b.id}
    assert len(editor.store) == 0
    assert editor.selection.current() == []
    assert editor.delete_selected() == []


def test_copy_paste_offsets_and_selects(editor):
    a = editor.add_element(ElementKind.RECTANGLE)
    assert editor.copy() == 1

    ids = editor.paste()

    (pasted_id,) = ids
    pasted = editor.store.get(pasted_id)
    assert pasted_id != a.id
    assert (pasted.x, pasted.y) == (a.x + 20, a.y + 20)
    assert pasted.name == a.name
    assert editor.selection.current() == ids


def test_paste_twice_creates_distinct_ids(editor):
    editor.add_element(ElementKind.RECTANGLE)
    editor.copy()
    first = editor.paste()
    second = editor.paste()
    assert set(first).isdisjoint(second)
    assert len(editor.store) == 3


def test_copy_with_empty_selection_keeps_clipboard(editor):
    editor.add_element(ElementKind.RECTANGLE)
    editor.copy()
    editor.selection.clear()
    assert editor.copy() == 0
    assert len(editor.clipboard) == 1
    assert DocEditor(config=CanvasConfig()).paste() == []


def test_font_size_has_a_floor(editor):
    text = editor.add_element(ElementKind.TEXT)
    editor.change_font_size(2)
    assert editor.store.get(text.id).font_size == 18
    for _i in range(10):
        editor.change_font_size(-2)
    assert editor.store.get(text.id).font_size == 8


def test_font_size_skips_non_text(editor):
    rect = editor.add_element(ElementKind.RECTANGLE)
    editor.change_font_size(4)
    assert editor.store.get(rect.id).font_size == 16


def test_switching_tool_commits_pen_path(editor):
    editor.set_tool(Tool.PEN)
    canvas = editor.canvas
    canvas.on_pointer_down(PointerEvent(0, 0))
    canvas.on_pointer_down(PointerEvent(30, 40))
    assert isinstance(canvas.session, Drawing)

    editor.set_tool(Tool.CURSOR)

    (path,) = editor.store.list_elements()
    assert path.kind == ElementKind.PATH
    assert canvas.is_idle


def test_tool_changed_signal(editor, mocker):
    handler = mocker.Mock()
    editor.tool_changed.connect(handler)
    editor.set_tool(Tool.HAND)
    editor.set_tool(Tool.HAND)
    handler.assert_called_once_with(editor, tool=Tool.HAND)


@pytest.mark.parametrize(
    "key, shift, tool",
    [("p", False, Tool.PEN), ("P", True, Tool.PENCIL),
     ("h", False, Tool.HAND), ("v", False, Tool.CURSOR)],
)
def test_tool_keys(editor, key, shift, tool):
    editor.set_tool(Tool.TEXT)
    assert editor.handle_key(key, shift=shift)
    assert editor.tool == tool


@pytest.mark.parametrize(
    "key, kind",
    [("r", ElementKind.RECTANGLE), ("o", ElementKind.ELLIPSE),
     ("t", ElementKind.TEXT), ("f", ElementKind.FRAME)],
)
def test_element_keys(editor, key, kind):
    assert editor.handle_key(key)
    (elem,) = editor.store.list_elements()
    assert elem.kind == kind


def test_command_keys(editor):
    text = editor.add_element(ElementKind.TEXT)
    assert editor.handle_key(">", shift=True, ctrl=True)
    assert editor.store.get(text.id).font_size == 18
    assert editor.handle_key(",", shift=True, meta=True)
    assert editor.store.get(text.id).font_size == 16

    assert editor.handle_key("c", ctrl=True)
    assert editor.handle_key("v", meta=True)
    assert len(editor.store) == 2

    assert editor.handle_key("Backspace")
    assert len(editor.store) == 1

    # Unbound shortcuts are left to the host.
    assert not editor.handle_key("r", ctrl=True)
    assert not editor.handle_key("x")
    assert len(editor.store) == 1


def test_escape_cancels_and_resets_tool(editor):
    elem = Element(ElementKind.RECTANGLE, 10, 10, 20, 20)
    editor.store.append_element(elem)
    editor.selection.select_exclusive(elem.id)
    editor.set_tool(Tool.HAND)

    assert editor.handle_key("Escape")

    assert editor.selection.current() == []
    assert editor.tool == Tool.CURSOR


@pytest.fixture
def user_config_dir(tmp_path, monkeypatch):
    """Points the config globals at a temporary directory."""
    temp_config_dir = tmp_path / "config"
    temp_config_dir.mkdir()
    monkeypatch.setattr(config, "CONFIG_DIR", temp_config_dir)
    monkeypatch.setattr(
        config, "CONFIG_FILE", temp_config_dir / "config.yaml"
    )
    monkeypatch.setattr(config, "config_mgr", None)
    monkeypatch.setattr(config, "config", None)
    yield temp_config_dir


def test_user_config_reaches_canvas(user_config_dir):
    (user_config_dir / "config.yaml").write_text(
        "canvas:\n  paste_offset: 50\n  grid_size: 25\n"
    )
    editor = DocEditor()

    assert editor.canvas.config.grid_size == 25
    rect = editor.add_element(ElementKind.RECTANGLE)
    editor.copy()
    (pasted_id,) = editor.paste()
    assert editor.store.get(pasted_id).x == rect.x + 50


def test_no_snap_flag_reaches_canvas(user_config_dir, monkeypatch):
    monkeypatch.setenv("GENMA_NO_SNAP", "true")
    editor = DocEditor()
    a = Element(ElementKind.RECTANGLE, 10, 10, 20, 20, id="a")
    editor.store.append_element(a)

    canvas = editor.canvas
    canvas.on_pointer_down(PointerEvent(15, 15, target_id="a"))
    canvas.on_pointer_move(PointerEvent(18, 19))

    assert editor.store.get("a").rect()[:2] == (13, 14)


def test_given_store_is_used_even_when_empty():
    store = ElementStore()
    assert DocEditor(store, CanvasConfig()).store is store
