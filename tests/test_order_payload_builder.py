from retail_cart.schemas.checkout_schemas import CheckoutDetails
from retail_cart.services.cart_aggregator import build_items
from retail_cart.services.order_payload_builder import build_payload, build_payload_from_state


class TestBuildPayload:

    def test_one_line_per_unified_item(self, cart_data, apartment_details):
        items = build_items(cart_data.additional_items, cart_data.packages)

        payload = build_payload(
            items,
            apartment_details,
            cart_id=42,
            payment_method="card",
            discount_amount=0,
            grand_total=3574.46,
        )

        assert len(payload.items) == len(items)
        assert [line.item_type for line in payload.items] == [
            "product", "product", "product", "package", "package"
        ]

    def test_product_lines(self, cart_data, apartment_details):
        items = build_items(cart_data.additional_items, cart_data.packages)
        payload = build_payload(
            items, apartment_details, cart_id=42, payment_method="cash",
            discount_amount=0, grand_total=1,
        )

        carrot = payload.items[0]
        assert carrot.product_id == 101
        assert carrot.package_id is None
        assert carrot.unit == "g"
        assert carrot.quantity == 56
        assert carrot.total_price == items[0].total_price
        assert carrot.total_discount == items[0].total_discount

    def test_package_lines_keep_constituent_id(self, cart_data, apartment_details):
        items = build_items(cart_data.additional_items, cart_data.packages)
        payload = build_payload(
            items, apartment_details, cart_id=42, payment_method="card",
            discount_amount=0, grand_total=1,
        )

        rice, dhal = payload.items[3:]
        assert rice.package_id == 7
        assert rice.id == 71
        assert dhal.id == 72
        assert rice.id != rice.package_id

    def test_checkout_details_are_copied_verbatim(self, apartment_details):
        payload = build_payload(
            [], apartment_details, cart_id=42, payment_method="card",
            discount_amount=5, grand_total=10, order_app="wholesale",
        )

        assert payload.checkout_details == CheckoutDetails.model_validate(apartment_details)
        assert payload.cart_id == "42"
        assert payload.order_app == "wholesale"

    def test_default_origin_tag(self, apartment_details):
        payload = build_payload(
            [], apartment_details, cart_id=42, payment_method="card",
            discount_amount=0, grand_total=10,
        )

        assert payload.order_app == "retail"

    def test_wire_format_uses_camel_case(self, cart_data, apartment_details):
        items = build_items(cart_data.additional_items, cart_data.packages)
        payload = build_payload(
            items, apartment_details, cart_id=42, payment_method="card",
            discount_amount=0, grand_total=1,
        )

        wire = payload.model_dump(by_alias=True)
        assert wire["cartId"] == "42"
        assert wire["items"][3]["packageId"] == 7
        assert wire["items"][3]["itemType"] == "package"
        assert wire["checkoutDetails"]["fullName"] == "Nimal Perera"


class TestBuildPayloadFromState:

    def test_totals_come_from_summary(self, store, apartment_details):
        store.patch_summary({"coupon_discount": 100, "final_total": 3474.46})

        payload = build_payload_from_state(store.state, apartment_details, "card")

        assert payload.cart_id == "42"
        assert payload.discount_amount == 100
        assert payload.grand_total == 3474.46
        assert len(payload.items) == 5
