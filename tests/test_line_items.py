from __future__ import annotations

import pytest

pytest.importorskip("pytestqt")

from invoice_builder.core.model import add_item, new_invoice, remove_item, update_item
from invoice_builder.widgets.line_items_widget import LineItemsWidget


def test_sync_tracks_rows_by_id(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    w = LineItemsWidget()
    qtbot.addWidget(w)
    inv = add_item(add_item(new_invoice()))
    w.sync(inv)
    rows = w.rows()
    assert [r.item_id for r in rows] == [it.id for it in inv.items]
    assert [r.title_lbl.text() for r in rows] == ["Item 1", "Item 2", "Item 3"]

    first = rows[0]
    inv = remove_item(inv, inv.items[1].id)
    w.sync(inv)
    rows = w.rows()
    assert len(rows) == 2
    assert rows[0] is first
    assert rows[1].title_lbl.text() == "Item 2"


def test_remove_button_hidden_for_sole_item(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    w = LineItemsWidget()
    qtbot.addWidget(w)
    inv = new_invoice()
    w.sync(inv)
    assert w.rows()[0].remove_btn.isHidden()
    inv = add_item(inv)
    w.sync(inv)
    assert not any(r.remove_btn.isHidden() for r in w.rows())


def test_typing_emits_field_edit(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    w = LineItemsWidget()
    qtbot.addWidget(w)
    w.show()
    inv = new_invoice()
    w.sync(inv)
    row = w.rows()[0]
    with qtbot.waitSignal(w.itemEdited) as blocker:
        qtbot.keyClicks(row.qty_edit, "3")
    assert blocker.args == [inv.items[0].id, "quantity", "3"]


def test_sync_refreshes_text_from_snapshot(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    w = LineItemsWidget()
    qtbot.addWidget(w)
    inv = new_invoice()
    w.sync(inv)
    inv = update_item(inv, inv.items[0].id, "unit_price", "1500")
    w.sync(inv)
    assert w.rows()[0].price_edit.text() == "1500"
