from __future__ import annotations

# Standardized columns of the Cotrac Nigeria sheet. Order is the CSV column order.
SYNC_WHITELIST: tuple[str, ...] = (
    "full_name",
    "email_address",
    "phone_no",
    "whatsapp_no",
    "license_plate",
    "chassis_no",
    "vehicle_make",
    "model",
    "unit_no",
    "home_zone",
    "company_name",
    "address",
    "city",
    "state",
    "mileage",
    "fuel_capacity",
    "fuel_sensor",
    "lead_source",
    "prev_install",
    "dob",
    "alt_contact",
    "social_handles",
    "engine_no",
    "vehicle_color",
    "speed_limit",
)
