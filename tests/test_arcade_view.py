from savepicker.dialog import SaveDialog
from savepicker.ui.arcade_view import ACTION_ACCEPT, ACTION_BACKSPACE, ACTION_CANCEL, ACTION_DOWN, ArcadePickerView
from savepicker.ui.widgets import Button, ListBox, TextField

KEY_ENTER, KEY_ESCAPE, KEY_BACKSPACE, KEY_DOWN = 1, 2, 3, 4
KEYS = {KEY_ENTER: ACTION_ACCEPT, KEY_ESCAPE: ACTION_CANCEL, KEY_BACKSPACE: ACTION_BACKSPACE, KEY_DOWN: ACTION_DOWN}


def _open(dialog, for_save, results):
    view = ArcadePickerView(key_actions=KEYS)
    machine = dialog.open(for_save, "save", "g", results.append, view)
    view.bind(machine)
    return view, machine


def test_button_hit_test_and_disabled_click():
    clicks = []
    b = Button(100, 50, 40, 20, "OK", lambda: clicks.append(1), enabled=False)
    assert b.hit_test(100, 50)
    assert b.hit_test(120, 60)
    assert not b.hit_test(121, 50)
    b.click()
    assert clicks == []
    b.enabled = True
    b.click()
    assert clicks == [1]


def test_text_field_hit_test():
    f = TextField(x=100, y=100, width=50, height=20)
    assert f.hit_test(80, 95)
    assert not f.hit_test(130, 100)


def test_list_box_rows_and_scrolling():
    box = ListBox(left=0, top=100, width=100, row_height=10, rows=[str(i) for i in range(8)], visible_rows=5)
    assert box.index_at(5, 95) == 0
    assert box.index_at(5, 75) == 2
    assert box.index_at(5, 40) is None
    assert box.index_at(150, 95) is None

    box.selected = 6
    box.ensure_visible()
    assert box.scroll == 2
    assert box.index_at(5, 95) == 2


def test_typing_and_accept_saves(storage):
    dialog = SaveDialog(storage)
    results = []
    view, machine = _open(dialog, True, results)

    view.on_text("ab")
    view.on_text("c\r")
    assert view.model.name == "abc"
    view.on_key_press(KEY_BACKSPACE)
    assert view.model.name == "ab"

    assert view.on_key_press(KEY_ENTER)
    assert results == [dialog.construct_ref("ab", "save", "g")]
    assert view.closed


def test_accept_button_click(storage):
    dialog = SaveDialog(storage)
    results = []
    view, machine = _open(dialog, True, results)
    view.on_text("slot")
    accept = view.buttons[1]
    assert view.on_mouse_press(accept.x, accept.y)
    assert results == [dialog.construct_ref("slot", "save", "g")]


def test_click_list_row_then_load(storage):
    dialog = SaveDialog(storage)
    dialog.write(dialog.construct_ref("only", "save", "g"), [1])
    results = []
    view, machine = _open(dialog, False, results)
    assert not view.name_field.enabled

    row_y = view.list_box.top - view.list_box.row_height / 2
    assert view.on_mouse_press(view.list_box.left + 5, row_y)
    assert not view.on_text("ignored")
    view.on_key_press(KEY_DOWN)
    assert view.model.selected_index == 0
    view.on_key_press(KEY_ENTER)
    assert results == [dialog.construct_ref("only", "save", "g")]


def test_disabled_accept_and_escape(storage):
    dialog = SaveDialog(storage)
    results = []
    view, machine = _open(dialog, False, results)
    accept = view.buttons[1]
    assert not accept.enabled
    view.on_mouse_press(accept.x, accept.y)
    assert results == []
    assert not view.on_key_press(999)
    view.on_key_press(KEY_ESCAPE)
    assert results == [None]
