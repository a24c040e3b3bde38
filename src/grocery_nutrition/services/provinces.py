"""Argentine province code lookup."""

import logging

from grocery_nutrition.domain.provinces import ProvinceResolution

PROVINCE_PREFIX = "AR-"

# ISO 3166-2:AR subdivision codes.
PROVINCE_NAMES: dict[str, str] = {
    "AR-A": "Salta",
    "AR-B": "Buenos Aires",
    "AR-C": "Ciudad Autónoma de Buenos Aires",
    "AR-D": "San Luis",
    "AR-E": "Entre Ríos",
    "AR-F": "La Rioja",
    "AR-G": "Santiago del Estero",
    "AR-H": "Chaco",
    "AR-J": "San Juan",
    "AR-K": "Catamarca",
    "AR-L": "La Pampa",
    "AR-M": "Mendoza",
    "AR-N": "Misiones",
    "AR-P": "Formosa",
    "AR-Q": "Neuquén",
    "AR-R": "Río Negro",
    "AR-S": "Santa Fe",
    "AR-T": "Tucumán",
    "AR-U": "Chubut",
    "AR-V": "Tierra del Fuego",
    "AR-W": "Corrientes",
    "AR-X": "Córdoba",
    "AR-Y": "Jujuy",
    "AR-Z": "Santa Cruz",
}

_logger = logging.getLogger(__name__)


def lookup_province(code: str) -> ProvinceResolution:
    """Resolve a province code, flagging codes missing from the table."""
    if not code.startswith(PROVINCE_PREFIX):
        return ProvinceResolution(code=code, name=code, known=True)
    name = PROVINCE_NAMES.get(code)
    if name is None:
        _logger.warning("Unknown province code: %s", code)
        return ProvinceResolution(code=code, name=code, known=False)
    return ProvinceResolution(code=code, name=name, known=True)


def resolve_province(code: str) -> str:
    """Return the display name for a province code."""
    return lookup_province(code).name


def province_options() -> list[tuple[str, str]]:
    """Return (code, name) pairs sorted by display name."""
    return sorted(PROVINCE_NAMES.items(), key=lambda item: item[1])
