from __future__ import annotations

from invoice_builder.styles.tokens import Colors, Radius, SheetColors, Space


def light_qss() -> str:
    c = Colors
    r = Radius
    s = Space
    return f"""
    QWidget {{ font-size: 13px; background: {c.bg}; color: {c.text}; }}
    QMainWindow>QWidget {{ background: {c.bg}; }}
    QFrame#Card {{ border: 2px solid {c.border}; border-radius: {r.lg}px; background: {c.card}; }}
    QFrame#ItemCard {{ border: 2px solid {c.border}; border-radius: {r.md}px; background: {c.card}; }}
    QLabel#FieldLabel {{ font-weight: 700; background: transparent; }}
    QLabel#SectionTitle {{ font-size: 14px; font-weight: 700; background: transparent; }}
    QLineEdit, QDateEdit {{
        border: 2px solid {c.input_border}; border-radius: {r.md}px; padding: {s.sm}px; background: {c.card};
    }}
    QLineEdit:focus, QDateEdit:focus {{ border: 2px solid {c.primary}; }}
    QLineEdit[invalid="true"] {{ background: {c.invalid_bg}; border: 1px solid {c.invalid_border}; }}
    QPushButton {{ padding: 8px 16px; border-radius: {r.md}px; border: none; color: #fff; font-weight: 700; }}
    QPushButton#PrimaryButton {{ background: {c.primary}; }}
    QPushButton#PrimaryButton:hover {{ background: {c.primary_hover}; }}
    QPushButton#SuccessButton {{ background: {c.success}; }}
    QPushButton#SuccessButton:hover {{ background: {c.success_hover}; }}
    QPushButton:disabled {{ background: #9ca3af; }}
    QPushButton#LinkButton {{ background: transparent; color: {c.danger}; font-weight: 400; padding: 2px; }}
    QScrollArea {{ border: none; }}
    """


def sheet_qss() -> str:
    """Styles for the printed invoice; independent of the app theme so exports look the same."""
    c = SheetColors
    return f"""
    QFrame#InvoiceSheet {{ background: {c.paper}; border-radius: 8px; }}
    QFrame#InvoiceSheet QLabel {{ background: transparent; color: {c.ink}; font-size: 18px; }}
    QFrame#InvoiceSheet QLabel#SheetTitle {{ color: {c.title}; font-size: 48px; font-weight: 700; }}
    QFrame#InvoiceSheet QLabel#SheetMeta {{ font-weight: 700; }}
    QFrame#InvoiceSheet QLabel#SheetHeading {{ font-size: 20px; font-weight: 700; }}
    QFrame#InvoiceSheet QLabel#TableHead {{ font-weight: 700; }}
    QFrame#InvoiceSheet QLabel#CellStrong {{ font-weight: 600; }}
    QFrame#InvoiceSheet QLabel#TotalLabel {{ font-size: 30px; }}
    QFrame#InvoiceSheet QLabel#TotalValue {{ font-size: 30px; font-weight: 700; color: {c.total}; }}
    QFrame#InvoiceSheet QLabel#ThankYou {{ font-size: 24px; }}
    QFrame#InvoiceSheet QFrame#Rule {{ background: {c.rule}; }}
    QFrame#InvoiceSheet QFrame#PaymentBox {{ background: {c.payment_box}; border-radius: 8px; }}
    QFrame#InvoiceSheet QLabel#PaymentTitle {{ color: {c.payment_title}; font-size: 20px; font-weight: 700; }}
    QFrame#InvoiceSheet QLabel#Logo {{ background: {c.logo_ring}; color: #ffffff; border-radius: 80px; font-size: 14px; }}
    """
