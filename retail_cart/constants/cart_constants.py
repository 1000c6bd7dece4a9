# Measurement units a raw cart item can carry
UNIT_KG = "kg"
UNIT_G = "g"
UNIT_UNIT = "unit"
UNIT_PACKAGE = "package"

UNITS = [UNIT_KG, UNIT_G, UNIT_UNIT, UNIT_PACKAGE]

GRAMS_PER_KG = 1000

# Unified item tags
ITEM_ADDITIONAL = "additional"
ITEM_PACKAGE = "package"

# Order line tags expected by the backend
ORDER_ITEM_TYPES = {
    ITEM_ADDITIONAL: "product",
    ITEM_PACKAGE: "package",
}

# Item types whose quantity can be edited after being added to the cart
QUANTITY_EDITABLE_TYPES = [ITEM_ADDITIONAL]

PAYMENT_METHODS = ["card", "cash"]

DELIVERY_HOME = "home"
DELIVERY_PICKUP = "pickup"
DELIVERY_METHODS = [DELIVERY_HOME, DELIVERY_PICKUP]

# The checkout form labels home delivery as "Delivery"
DELIVERY_ALIASES = {
    "delivery": DELIVERY_HOME,
}

BUILDING_APARTMENT = "apartment"
BUILDING_HOUSE = "house"
BUILDING_TYPES = [BUILDING_APARTMENT, BUILDING_HOUSE]
