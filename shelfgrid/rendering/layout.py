"""Table layout shared by the full-page and AJAX render paths.

Both paths build a TableLayout from the same configuration, so the
visible column list, the bulk-select checkbox position and the
empty-state colspan can never disagree between them.
"""

from dataclasses import dataclass

from markupsafe import Markup

from shelfgrid.products.schemas import ProductRow
from shelfgrid.styles.compiler import column_class, visibility_class
from shelfgrid.styles.sanitize import css_identifier
from shelfgrid.tables.schemas import BulkSelect, Column, TableConfiguration

from . import labels
from .buttons import CartBehavior
from .cells import RowContext, render_cell

# Column types owned by table features rather than the column list.
RESERVED_COLUMN_TYPES = frozenset({"checkbox"})


def _classes(*names: str) -> str:
    return " ".join(n for n in names if n)


@dataclass(frozen=True)
class TableLayout:
    """Visible columns (with their table index) and bulk-select placement."""

    columns: tuple[tuple[int, Column], ...]
    bulk_select: BulkSelect

    @classmethod
    def from_table(cls, table: TableConfiguration) -> "TableLayout":
        visible = tuple(
            (index, column)
            for index, column in enumerate(table.columns)
            if not column.is_hidden and column.type not in RESERVED_COLUMN_TYPES
        )
        return cls(columns=visible, bulk_select=table.settings.features.bulk_select)

    @property
    def has_checkbox(self) -> bool:
        return self.bulk_select.active

    @property
    def colspan(self) -> int:
        """Full-row span: visible columns plus the checkbox column."""
        return max(len(self.columns) + (1 if self.has_checkbox else 0), 1)

    def _place_checkbox(self, cells: list[Markup], checkbox: Markup) -> list[Markup]:
        if not self.has_checkbox:
            return cells
        if self.bulk_select.position == "last":
            return cells + [checkbox]
        return [checkbox] + cells

    def _cell_class(self, index: int, column: Column) -> str:
        return _classes(
            "shelfgrid-col",
            column_class(column, index),
            f"shelfgrid-cell-{css_identifier(column.type)}" if column.type else "",
            visibility_class(column.advanced.visibility),
        )

    def _checkbox_class(self) -> str:
        return _classes("shelfgrid-col-select", visibility_class(self.bulk_select.visibility))

    # -- Header --

    def header_row(self) -> Markup:
        cells = [
            Markup('<th class="{cls}" scope="col">{heading}</th>').format(
                cls=self._cell_class(index, column),
                heading=column.heading if column.advanced.show_heading else "",
            )
            for index, column in self.columns
        ]
        checkbox = Markup(
            '<th class="{cls}" scope="col"><input type="checkbox" '
            'class="shelfgrid-select-all" aria-label="{label}"></th>'
        ).format(cls=self._checkbox_class(), label=labels.SELECT_ALL)
        return Markup("<tr>{0}</tr>").format(
            Markup("").join(self._place_checkbox(cells, checkbox))
        )

    # -- Body --

    def _checkbox_cell(self, row: RowContext) -> Markup:
        product = row.product
        return Markup(
            '<td class="{cls}"><input type="checkbox" class="shelfgrid-select-product" '
            'value="{id}" data-price="{price}" aria-label="{label}"{disabled}></td>'
        ).format(
            cls=self._checkbox_class(),
            id=product.id,
            price=product.price if product.price is not None else 0,
            label=labels.SELECT_PRODUCT,
            disabled=Markup("") if row.button.addable else Markup(" disabled"),
        )

    def product_row(self, product: ProductRow, cart: CartBehavior) -> Markup:
        row = RowContext.for_product(product, cart)
        cells = [
            Markup('<td class="{cls}">{content}</td>').format(
                cls=self._cell_class(index, column),
                content=render_cell(column, row),
            )
            for index, column in self.columns
        ]
        return Markup(
            '<tr class="shelfgrid-row" data-product-id="{id}" '
            'data-product-type="{kind}" data-button-state="{state}">{cells}</tr>'
        ).format(
            id=product.id,
            kind=product.kind.value,
            state=row.button.tag,
            cells=Markup("").join(self._place_checkbox(cells, self._checkbox_cell(row))),
        )

    def empty_row(self) -> Markup:
        return Markup(
            '<tr class="shelfgrid-empty"><td colspan="{colspan}">{text}</td></tr>'
        ).format(colspan=self.colspan, text=labels.NO_PRODUCTS)

    def body_rows(self, products: list[ProductRow], cart: CartBehavior) -> Markup:
        """All product rows, or the single empty-state row."""
        if not products:
            return self.empty_row()
        return Markup("").join(self.product_row(p, cart) for p in products)
