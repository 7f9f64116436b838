from __future__ import annotations

from typing import List

YES_NO = ["YES", "NO"]
LEAD_SOURCES = ["BILLBOARD", "RADIO", "FRIEND", "STREET", "STICKER", "WEBSITE"]


def is_fuel_plan(service_name: str) -> bool:
    name = str(service_name or "").upper()
    return "ENTERPRISE" in name or "FUEL" in name


def _options(values: List[str]) -> str:
    return "[" + ", ".join(f'"{v}"' for v in values) + "]"


def build_field_brief(service_name: str) -> str:
    """
    Sectioned field list sent alongside the plan name.

    Fuel monitoring fields are only requested for plans that ship the fuel sensor.
    """
    lines = [
        f'Generate form fields for Cotrac Nigeria: "{service_name}".',
        "",
        "SECTION: Customer",
        "- email_address (Required: true)",
        "- full_name (Required: true)",
        "- company_name, home_zone, address, dob, city, whatsapp_no, state, phone_no, alt_contact",
        f"- prev_install (Options: {_options(YES_NO)})",
        f"- lead_source (Options: {_options(LEAD_SOURCES)})",
        "- social_handles",
        "",
        "SECTION: Vehicle",
        "- license_plate, unit_no, vehicle_make, sim_no, model, engine_no, vehicle_color, mileage, chassis_no, speed_limit",
    ]
    if is_fuel_plan(service_name):
        lines.append(f"- fuel_capacity, fuel_sensor (Options: {_options(YES_NO)})")
    lines.extend(["", "Return a JSON array of FormField objects."])
    return "\n".join(lines)
