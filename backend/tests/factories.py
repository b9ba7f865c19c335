"""Plain helpers shared by the test modules."""

from realty.core.security import create_access_token


def auth_headers(user) -> dict:
    token = create_access_token(user.id, user.role)
    return {"Authorization": f"Bearer {token}"}


def property_payload(**overrides) -> dict:
    payload = {
        "title": "3BHK Flat in Vijay Nagar",
        "locality": "Vijay Nagar",
        "city": "Indore",
        "state": "Madhya Pradesh",
        "property_type": "flat",
        "price": 4500000,
        "area_sqft": 1450,
        "bedrooms": 3,
    }
    payload.update(overrides)
    return payload


def rental_payload(**overrides) -> dict:
    payload = {
        "title": "2BHK for rent near Palasia",
        "locality": "Palasia",
        "city": "Indore",
        "state": "Madhya Pradesh",
        "monthly_rent": 18000,
        "property_type": "flat",
        "area_sqft": 950,
        "bedrooms": 2,
        "rent_type": "semi-furnished",
        "tenant_type": "family",
    }
    payload.update(overrides)
    return payload
