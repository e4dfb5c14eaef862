from __future__ import annotations

from datetime import date as _date

from PySide6.QtCore import Qt, QDate
from PySide6.QtWidgets import (
	QWidget,
	QFrame,
	QFormLayout,
	QLineEdit,
	QDateEdit,
	QVBoxLayout,
	QLabel,
	QPushButton,
	QMessageBox,
	QScrollArea,
)

from invoice_builder.core.session import SessionController
from invoice_builder.core.model import Invoice
from invoice_builder.widgets.line_items_widget import LineItemsWidget


def _set_invalid(widget: QWidget, invalid: bool) -> None:
	widget.setProperty("invalid", invalid)
	widget.style().unpolish(widget)
	widget.style().polish(widget)


class InvoiceForm(QWidget):
	"""Edit view: customer, invoice info and line items, bound to a SessionController.

	Every keystroke becomes a model operation on the session; the widgets are
	refreshed from the resulting snapshot.
	"""

	def __init__(self, session: SessionController, parent=None) -> None:
		super().__init__(parent)
		self.session = session

		outer = QVBoxLayout(self)
		outer.setContentsMargins(0, 0, 0, 0)
		scroll = QScrollArea()
		scroll.setWidgetResizable(True)
		outer.addWidget(scroll)

		body = QWidget()
		scroll.setWidget(body)
		root = QVBoxLayout(body)
		root.setContentsMargins(24, 24, 24, 24)
		root.setAlignment(Qt.AlignHCenter | Qt.AlignTop)

		card = QFrame()
		card.setObjectName("Card")
		card.setMaximumWidth(672)
		card_layout = QVBoxLayout(card)
		card_layout.setContentsMargins(32, 32, 32, 32)
		card_layout.setSpacing(24)
		root.addWidget(card)

		form = QFormLayout()
		form.setRowWrapPolicy(QFormLayout.WrapAllRows)
		form.setFieldGrowthPolicy(QFormLayout.AllNonFixedFieldsGrow)
		self.name_edit = QLineEdit()
		self.phone_edit = QLineEdit()
		self.date_edit = QDateEdit()
		self.date_edit.setDisplayFormat("yyyy-MM-dd")
		self.date_edit.setCalendarPopup(True)
		self.number_edit = QLineEdit()
		for text, w in (
			("Customer Name:", self.name_edit),
			("Phone Number:", self.phone_edit),
			("Date:", self.date_edit),
			("Invoice Number:", self.number_edit),
		):
			lbl = QLabel(text)
			lbl.setObjectName("FieldLabel")
			form.addRow(lbl, w)
		card_layout.addLayout(form)

		self.items = LineItemsWidget(self)
		card_layout.addWidget(self.items)

		self.btn_preview = QPushButton("Preview Invoice")
		self.btn_preview.setObjectName("PrimaryButton")
		self.btn_preview.setMinimumHeight(44)
		card_layout.addWidget(self.btn_preview)

		# Signals: widgets -> session
		self.name_edit.textEdited.connect(lambda t: self.session.set_header_field("customer_name", t))
		self.phone_edit.textEdited.connect(lambda t: self.session.set_header_field("customer_phone", t))
		self.number_edit.textEdited.connect(lambda t: self.session.set_header_field("invoice_number", t))
		self.date_edit.dateChanged.connect(self._on_date_changed)
		self.items.addRequested.connect(self.session.add_item)
		self.items.removeRequested.connect(self.session.remove_item)
		self.items.itemEdited.connect(self.session.update_item)
		self.btn_preview.clicked.connect(self.submit)

		# Session -> widgets
		self.session.invoiceChanged.connect(self.load)
		self.load(self.session.invoice)

	def _on_date_changed(self, qd: QDate) -> None:
		iso = _date(qd.year(), qd.month(), qd.day()).isoformat()
		if iso != self.session.invoice.date:
			self.session.set_header_field("date", iso)

	def load(self, invoice: Invoice) -> None:
		for edit, value in (
			(self.name_edit, invoice.customer_name),
			(self.phone_edit, invoice.customer_phone),
			(self.number_edit, invoice.invoice_number),
		):
			if edit.text() != value:
				edit.setText(value)
		qd = QDate.fromString(invoice.date, "yyyy-MM-dd")
		if qd.isValid() and qd != self.date_edit.date():
			self.date_edit.setDate(qd)
		self.items.sync(invoice)

	def mark_invalid_fields(self) -> None:
		inv = self.session.invoice
		_set_invalid(self.name_edit, not inv.customer_name.strip())
		_set_invalid(self.phone_edit, not inv.customer_phone.strip())
		_set_invalid(self.number_edit, not inv.invoice_number.strip())
		for it in inv.items:
			row = self.items.row_for(it.id)
			if row is None:
				continue
			_set_invalid(row.desc_edit, not str(it.description).strip())
			_set_invalid(row.qty_edit, not str(it.quantity).strip())
			_set_invalid(row.price_edit, not str(it.unit_price).strip())

	def submit(self) -> bool:
		"""Validate and switch to preview. Shows one dialog listing all issues when invalid."""
		issues = self.session.submit()
		self.mark_invalid_fields()
		if issues:
			QMessageBox.warning(self, "Fix form errors", "\n".join(f"• {m}" for m in issues))
			return False
		return True
