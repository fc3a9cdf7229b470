from hexstack.components.hex_layout import HexLayout
from hexstack.constants import HEX_COL_SPACING, HEX_MAX_SIZE, HEX_ROW_SPACING


def compute_hex_layout(width: float, height: float, cols: int, rows: int) -> HexLayout:
    """Fit a cols x rows hex grid inside a width x height area, centred.

    Input mapping and rendering both read the resulting HexLayout so hit-testing
    always agrees with what is drawn.
    """
    max_by_w = width / (cols * HEX_COL_SPACING + 0.5)
    max_by_h = height / (rows * HEX_ROW_SPACING + 1)
    size = min(max_by_w, max_by_h, HEX_MAX_SIZE)
    grid_w = cols * size * HEX_COL_SPACING
    grid_h = rows * size * HEX_ROW_SPACING
    origin_x = (width - grid_w) / 2 + size
    origin_y = (height - grid_h) / 2 + size
    return HexLayout(size=size, origin_x=origin_x, origin_y=origin_y)
