"""QSS stylesheets and the light/dark palettes for PomoWidget."""

from __future__ import annotations

# ── palettes ─────────────────────────────────────────────────────────────

LIGHT_PALETTE: dict[str, str] = {
    "bg":             "#FFFFFF",
    "card":           "#FFFFFF",
    "text":           "#0F172A",
    "text_muted":     "#64748B",
    "primary":        "#0F172A",
    "primary_text":   "#F8FAFC",
    "secondary":      "#F1F5F9",
    "secondary_text": "#0F172A",
    "secondary_hover": "#E2E8F0",
    "border":         "#E2E8F0",
    "minimize":       "#EAB308",
    "minimize_hover": "#CA8A04",
    "close":          "#EF4444",
    "close_hover":    "#DC2626",
}

DARK_PALETTE: dict[str, str] = {
    "bg":             "#020817",
    "card":           "#020817",
    "text":           "#F8FAFC",
    "text_muted":     "#94A3B8",
    "primary":        "#F8FAFC",
    "primary_text":   "#0F172A",
    "secondary":      "#1E293B",
    "secondary_text": "#F8FAFC",
    "secondary_hover": "#334155",
    "border":         "#1E293B",
    "minimize":       "#EAB308",
    "minimize_hover": "#CA8A04",
    "close":          "#EF4444",
    "close_hover":    "#DC2626",
}


def get_palette(is_dark_mode: bool) -> dict[str, str]:
    """Return a copy of the palette for the requested appearance."""
    return dict(DARK_PALETTE if is_dark_mode else LIGHT_PALETTE)


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str], *, transparent: bool = False) -> str:
    p = palette
    card_bg = "transparent" if transparent else p["card"]
    time_color = "#FFFFFF" if transparent else p["text"]
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QFrame#card {{
        background-color: {card_bg};
        border: 1px solid {p['border'] if not transparent else 'transparent'};
        border-radius: 24px;
    }}

    /* ── labels ──────────────────────────────────── */
    QLabel#timeLabel {{
        background: transparent;
        color: {time_color};
        font-size: 96px;
        font-weight: 300;
    }}

    QLabel#statusLabel {{
        background: transparent;
        color: {p['text_muted']};
        font-size: 13px;
        font-weight: 500;
    }}

    /* ── round controls ──────────────────────────── */
    QPushButton {{
        background-color: {p['secondary']};
        color: {p['secondary_text']};
        border: none;
        border-radius: 32px;
        min-width: 64px;
        min-height: 64px;
        font-size: 20px;
    }}

    QPushButton:hover {{
        background-color: {p['secondary_hover']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['primary']};
        color: {p['primary_text']};
    }}

    QPushButton#cornerButton {{
        border-radius: 20px;
        min-width: 40px;
        min-height: 40px;
        font-size: 16px;
    }}

    /* ── presets ─────────────────────────────────── */
    QPushButton#presetButton {{
        border-radius: 16px;
        min-width: 72px;
        min-height: 32px;
        padding: 0 16px;
        font-size: 13px;
        font-weight: 600;
    }}

    QPushButton#presetButton:checked {{
        background-color: {p['primary']};
        color: {p['primary_text']};
    }}

    /* ── window chrome ───────────────────────────── */
    QPushButton#minimizeButton, QPushButton#closeButton {{
        border-radius: 12px;
        min-width: 24px;
        max-width: 24px;
        min-height: 24px;
        max-height: 24px;
        font-size: 11px;
        font-weight: 700;
    }}

    QPushButton#minimizeButton {{
        background-color: {p['minimize']};
        color: #713F12;
    }}

    QPushButton#minimizeButton:hover {{
        background-color: {p['minimize_hover']};
    }}

    QPushButton#closeButton {{
        background-color: {p['close']};
        color: #7F1D1D;
    }}

    QPushButton#closeButton:hover {{
        background-color: {p['close_hover']};
    }}

    /* ── settings dialog ─────────────────────────── */
    QDialog {{
        background-color: {p['bg']};
    }}

    QSpinBox {{
        background-color: {p['secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 10px;
    }}

    QLabel#errorLabel {{
        color: {p['close']};
        font-size: 12px;
    }}
    """
