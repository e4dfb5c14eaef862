"""Design tokens for the invoice builder UI and the printed invoice sheet.

- Keep form colors calm and neutral.
- Spacing scale uses 4px multiples.
"""

from __future__ import annotations


class Colors:
    bg = "#f5f5f5"
    card = "#ffffff"
    text = "#111"
    subtext = "#444"
    border = "#e5e7eb"
    input_border = "#d1d5db"
    primary = "#3b82f6"
    primary_hover = "#2563eb"
    success = "#22c55e"
    success_hover = "#16a34a"
    danger = "#ef4444"
    invalid_bg = "#ffecec"
    invalid_border = "#e07070"


class SheetColors:
    # Printed invoice
    paper = "#ffffff"
    ink = "#000000"
    title = "#2dd4bf"
    total = "#1e40af"
    payment_title = "#b91c1c"
    payment_box = "#f3f4f6"
    rule = "#d1d5db"
    logo_ring = "#000000"


class Radius:
    sm = 6
    md = 8
    lg = 12


class Space:
    xs = 4
    sm = 8
    md = 12
    lg = 16
    xl = 24
    xxl = 48


class Sheet:
    # A4 at 96 dpi
    width = 794
    min_height = 1123
    padding = 32
    logo = 160
