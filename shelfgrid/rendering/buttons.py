"""Purchase-control sub-renderer for the ``button`` column.

A product's purchase control is resolved once per row into one of six
mutually exclusive states, then rendered. Resolution order (first match
wins):

1. External: outbound link to the affiliate URL, whatever the stock
2. Grouped: link to the product page ("View options")
3. OutOfStock: disabled control, no link
4. LinkOnly: cart disabled for the table, link to the product page
5. Variable: attribute selectors resolving a variation client-side
6. Simple: quantity stepper (optional) and add-to-cart submit

The row's bulk-select checkbox reads ``addable`` from the same state, so
bulk actions can never target something the button would not add.
"""

import json
from dataclasses import dataclass
from typing import Callable, ClassVar, Optional, Union

from markupsafe import Markup

from shelfgrid.products.schemas import ProductKind, ProductRow, Variation, VariationAttribute
from shelfgrid.tables.schemas import CartSettings

from . import labels
from .urls import safe_url


@dataclass(frozen=True)
class CartBehavior:
    """Cart settings fixed for the duration of one render call."""

    enable: bool = True
    show_quantity: bool = True

    @classmethod
    def from_settings(cls, settings: CartSettings) -> "CartBehavior":
        return cls(enable=settings.enable, show_quantity=settings.show_quantity)


# -- States --


@dataclass(frozen=True)
class External:
    url: str
    label: str
    tag: ClassVar[str] = "external"
    addable: ClassVar[bool] = False


@dataclass(frozen=True)
class Grouped:
    url: str
    tag: ClassVar[str] = "grouped"
    addable: ClassVar[bool] = False


@dataclass(frozen=True)
class OutOfStock:
    tag: ClassVar[str] = "out_of_stock"
    addable: ClassVar[bool] = False


@dataclass(frozen=True)
class LinkOnly:
    url: str
    label: str
    tag: ClassVar[str] = "link_only"
    addable: ClassVar[bool] = False


@dataclass(frozen=True)
class Variable:
    """Variable product; addable only once the client resolves a variation."""

    product_id: int
    attributes: tuple[VariationAttribute, ...]
    variations: tuple[Variation, ...]
    show_quantity: bool
    tag: ClassVar[str] = "variable"
    addable: ClassVar[bool] = False


@dataclass(frozen=True)
class Simple:
    product_id: int
    label: str
    show_quantity: bool
    max_quantity: Optional[int]
    disabled: bool
    tag: ClassVar[str] = "simple"

    @property
    def addable(self) -> bool:
        return not self.disabled


ButtonState = Union[External, Grouped, OutOfStock, LinkOnly, Variable, Simple]


def resolve_button_state(product: ProductRow, cart: CartBehavior) -> ButtonState:
    """Classify a product's purchase control. Pure; called once per row."""
    if product.kind == ProductKind.EXTERNAL:
        return External(
            url=safe_url(product.external_url) or safe_url(product.permalink, "#"),
            label=product.button_text or labels.BUY_PRODUCT,
        )

    if product.kind == ProductKind.GROUPED:
        return Grouped(url=safe_url(product.permalink, "#"))

    if not product.is_in_stock or product.max_purchase_quantity == 0:
        return OutOfStock()

    if not cart.enable:
        if product.kind == ProductKind.VARIABLE:
            label = labels.SELECT_OPTIONS
        else:
            label = product.button_text or labels.ADD_TO_CART
        return LinkOnly(url=safe_url(product.permalink, "#"), label=label)

    if product.kind == ProductKind.VARIABLE:
        return Variable(
            product_id=product.id,
            attributes=tuple(product.attributes),
            variations=tuple(product.variations),
            show_quantity=cart.show_quantity,
        )

    return Simple(
        product_id=product.id,
        label=product.button_text or labels.ADD_TO_CART,
        show_quantity=cart.show_quantity,
        max_quantity=product.max_purchase_quantity,
        disabled=not product.purchasable,
    )


# -- Rendering --


def _render_external(state: External) -> Markup:
    return Markup(
        '<a href="{url}" class="button shelfgrid-btn shelfgrid-btn-external" '
        'target="_blank" rel="nofollow noopener">{label}</a>'
    ).format(url=state.url, label=state.label)


def _render_grouped(state: Grouped) -> Markup:
    return Markup(
        '<a href="{url}" class="button shelfgrid-btn shelfgrid-btn-view-options">{label}</a>'
    ).format(url=state.url, label=labels.VIEW_OPTIONS)


def _render_out_of_stock(state: OutOfStock) -> Markup:
    return Markup(
        '<button type="button" class="button shelfgrid-btn shelfgrid-btn-out-of-stock" '
        'disabled>{label}</button>'
    ).format(label=labels.OUT_OF_STOCK)


def _render_link_only(state: LinkOnly) -> Markup:
    return Markup(
        '<a href="{url}" class="button shelfgrid-btn shelfgrid-btn-link">{label}</a>'
    ).format(url=state.url, label=state.label)


def _quantity_input(max_quantity: Optional[int] = None, disabled: bool = False) -> Markup:
    attrs = Markup(' max="{0}"').format(max_quantity) if max_quantity is not None else ""
    return Markup(
        '<input type="number" class="shelfgrid-qty" name="quantity" value="1" '
        'min="1"{max} step="1" aria-label="{label}"{disabled}>'
    ).format(
        max=attrs,
        label=labels.QUANTITY,
        disabled=Markup(" disabled") if disabled else "",
    )


def _variations_json(state: Variable) -> str:
    return json.dumps([
        {
            "variation_id": v.id,
            "attributes": {f"attribute_{k}": val for k, val in v.attributes.items()},
            "price_html": v.price_html,
            "is_in_stock": v.in_stock,
            "is_purchasable": v.purchasable,
            "max_qty": (
                v.stock_quantity
                if v.manage_stock and not v.backorders_allowed
                else None
            ),
        }
        for v in state.variations
    ])


def _render_variable(state: Variable) -> Markup:
    selects = []
    for attribute in state.attributes:
        options = [
            Markup('<option value="">{0}</option>').format(labels.CHOOSE_OPTION)
        ]
        options.extend(
            Markup('<option value="{value}">{label}</option>').format(
                value=option.value, label=attribute.option_label(option)
            )
            for option in attribute.options
        )
        selects.append(
            Markup(
                '<select class="shelfgrid-variation-select" name="attribute_{name}" '
                'data-attribute_name="attribute_{name}" aria-label="{label}">{options}</select>'
            ).format(
                name=attribute.name,
                label=attribute.label or attribute.name,
                options=Markup("").join(options),
            )
        )

    quantity = _quantity_input(disabled=True) if state.show_quantity else ""
    return Markup(
        '<div class="shelfgrid-variations" data-product_id="{id}" '
        'data-product_variations="{variations}">{selects}'
        '<input type="hidden" name="variation_id" class="shelfgrid-variation-id" value="">'
        '<span class="shelfgrid-variation-price" aria-live="polite"></span>'
        '<div class="shelfgrid-add-to-cart">{quantity}'
        '<button type="button" class="button shelfgrid-btn shelfgrid-add-to-cart-btn" '
        'data-product_id="{id}" disabled>{label}</button></div></div>'
    ).format(
        id=state.product_id,
        variations=_variations_json(state),
        selects=Markup("").join(selects),
        quantity=quantity,
        label=labels.ADD_TO_CART,
    )


def _render_simple(state: Simple) -> Markup:
    quantity = _quantity_input(state.max_quantity) if state.show_quantity else ""
    return Markup(
        '<div class="shelfgrid-add-to-cart" data-product_id="{id}">{quantity}'
        '<button type="button" class="button shelfgrid-btn shelfgrid-add-to-cart-btn" '
        'data-product_id="{id}" data-quantity="1"{disabled}>{label}</button></div>'
    ).format(
        id=state.product_id,
        quantity=quantity,
        disabled=Markup(" disabled") if state.disabled else "",
        label=state.label,
    )


_BUTTON_RENDERERS: dict[type, Callable[..., Markup]] = {
    External: _render_external,
    Grouped: _render_grouped,
    OutOfStock: _render_out_of_stock,
    LinkOnly: _render_link_only,
    Variable: _render_variable,
    Simple: _render_simple,
}


def render_button_state(state: ButtonState) -> Markup:
    return _BUTTON_RENDERERS[type(state)](state)


def render_button(product: ProductRow, cart: CartBehavior) -> Markup:
    """Resolve and render the purchase control for one product."""
    return render_button_state(resolve_button_state(product, cart))
