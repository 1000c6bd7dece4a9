import json

import pytest
import requests

from retail_cart.schemas.cart_schemas import CartData
from retail_cart.services.cart_store import CartStore


@pytest.fixture
def raw_cart():
    """Cart payload as returned by GET /product/cart (camelCase, capitalised Items)."""
    return {
        "cart": {
            "cartId": 42,
            "userId": 9,
            "buyerType": "Retail",
            "isCoupon": 0,
            "couponValue": None,
            "createdAt": "2025-01-10T08:00:00Z",
        },
        "packages": [
            {
                "id": 7,
                "cartItemId": 601,
                "packageName": "Family Pack",
                "totalItems": 2,
                "price": 2500,
                "quantity": 1,
                "image": "family.png",
                "description": "Weekly staples",
                "items": [
                    {"id": 71, "name": "Rice", "quantity": 5, "hasSpecialBadge": True},
                    {"id": 72, "name": "Dhal", "quantity": 1, "hasSpecialBadge": False},
                ],
            }
        ],
        "additionalItems": [
            {
                "id": 1,
                "packageName": "miscellaneous",
                "Items": [
                    {
                        "id": 101,
                        "cartItemId": 501,
                        "name": "Carrot",
                        "unit": "g",
                        "quantity": 56,
                        "discount": 112,
                        "price": 615.44,
                        "normalPrice": 700,
                        "discountedPrice": None,
                        "image": "carrot.png",
                        "varietyNameEnglish": "Nantes",
                        "category": "Vegetables",
                        "createdAt": "2025-01-10T08:05:00Z",
                    },
                    {
                        "id": 102,
                        "cartItemId": 502,
                        "name": "Potato",
                        "unit": "kg",
                        "quantity": 2,
                        "discount": 10,
                        "price": 250,
                        "normalPrice": 260,
                        "discountedPrice": 240,
                        "image": "potato.png",
                        "varietyNameEnglish": "Granola",
                        "category": "Vegetables",
                        "createdAt": "2025-01-10T08:06:00Z",
                    },
                ],
            },
            {
                "id": 2,
                "packageName": "fruits",
                "Items": [
                    {
                        "id": 201,
                        "cartItemId": 503,
                        "name": "Banana",
                        "unit": "kg",
                        "quantity": 3,
                        "discount": 0,
                        "price": 180,
                        "normalPrice": 180,
                        "discountedPrice": None,
                        "image": "banana.png",
                        "varietyNameEnglish": "Ambul",
                        "category": "Fruits",
                        "createdAt": "2025-01-10T08:07:00Z",
                    },
                ],
            },
        ],
        "summary": {
            "totalPackages": 1,
            "totalProducts": 3,
            "packageTotal": 2500,
            "productTotal": 1074.46,
            "grandTotal": 3574.46,
            "totalItems": 4,
            "couponDiscount": 0,
            "finalTotal": 3574.46,
        },
    }


@pytest.fixture
def cart_data(raw_cart):
    return CartData.model_validate(raw_cart)


@pytest.fixture
def store(cart_data):
    store = CartStore()
    store.set_cart_data(cart_data)
    return store


@pytest.fixture
def apartment_details():
    return {
        "deliveryMethod": "home",
        "title": "Mr",
        "fullName": "Nimal Perera",
        "phoneCode1": "94",
        "phone1": "771234567",
        "phoneCode2": "94",
        "phone2": "",
        "buildingType": "apartment",
        "buildingNo": "12",
        "buildingName": "Lake Towers",
        "flatNumber": "4B",
        "floorNumber": "4",
        "cityName": "Colombo",
        "deliveryDate": "2025-01-15",
        "timeSlot": "Within 8-12 PM",
        "scheduleType": "One Time",
    }


def make_response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def response_factory():
    return make_response
