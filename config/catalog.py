"""
Service catalog and customizer add-ons.

Prices in INR. Services marked requires_advance use externally sourced
materials (lining, padding, embellishment) and need an upfront payment.
"""

from typing import Optional

# =============================================================================
# SERVICES
# =============================================================================

SERVICE_CATALOG = [
    # Simple stitching
    {"id": "simple-salwar", "name": "Simple Salwar Suit", "category": "simple", "base_price": 700, "requires_advance": False},
    {"id": "simple-pant-suit", "name": "Simple Pant Suit", "category": "simple", "base_price": 800, "requires_advance": False},
    {"id": "simple-blouse", "name": "Simple Blouse", "category": "simple", "base_price": 500, "requires_advance": False},
    {"id": "simple-pant", "name": "Simple Pant", "category": "simple", "base_price": 400, "requires_advance": False},

    # Lining work
    {"id": "lining-salwar", "name": "Lining Salwar Suit", "category": "lining", "base_price": 1300, "requires_advance": True},
    {"id": "lining-pant-suit", "name": "Lining Pant Suit", "category": "lining", "base_price": 1600, "requires_advance": True},
    {"id": "lining-blouse", "name": "Lining Blouse", "category": "lining", "base_price": 800, "requires_advance": True},

    # Premium ethnic
    {"id": "padded-blouse", "name": "Padded Blouse", "category": "premium-ethnic", "base_price": 1500, "requires_advance": True},
    {"id": "princess-blouse", "name": "Princess Cut Blouse", "category": "premium-ethnic", "base_price": 1200, "requires_advance": False},
    {"id": "anarkali", "name": "Anarkali & Sharara", "category": "premium-ethnic", "base_price": 2500, "requires_advance": True},
    {"id": "coord-set", "name": "Co-ord Set", "category": "premium-ethnic", "base_price": 1800, "requires_advance": True},
    {"id": "sabyasachi-blouse", "name": "Sabyasachi Styled Blouse", "category": "premium-ethnic", "base_price": 2500, "requires_advance": True},

    # Bridal
    {"id": "bridal-blouse", "name": "Bridal Blouse", "category": "bridal", "base_price": 2100, "requires_advance": True},
    {"id": "bridal-padded-suit", "name": "Bridal Padded Suit", "category": "bridal", "base_price": 2100, "requires_advance": True},

    # Western
    {"id": "jumpsuit", "name": "Jump Suit", "category": "western", "base_price": 1600, "requires_advance": True},
    {"id": "gown", "name": "Gown", "category": "western", "base_price": 2500, "requires_advance": True},
    {"id": "fish-cut-lehenga", "name": "Fish Cut Lehenga", "category": "western", "base_price": 2500, "requires_advance": True},

    # Priced after consultation
    {"id": "custom-order", "name": "Custom Creation", "category": "others", "base_price": 0, "requires_advance": True},
]


# =============================================================================
# CUSTOMIZER ADD-ONS
# =============================================================================
# Neck designs, sleeve styles, and fit options are free; only these cost extra.

ADD_ON_CATALOG = [
    {"id": "piping", "name": "Piping Work", "price": 100},
    {"id": "tassels", "name": "Tassels/Latkans", "price": 200},
]


def get_service(service_id: str) -> Optional[dict]:
    """Look up a catalog service by id."""
    for service in SERVICE_CATALOG:
        if service["id"] == service_id:
            return service
    return None


def get_add_on(add_on_id: str) -> Optional[dict]:
    """Look up a customizer add-on by id."""
    for add_on in ADD_ON_CATALOG:
        if add_on["id"] == add_on_id:
            return add_on
    return None

