"""
Tracura - Built-in Template Catalog

Seeded project templates. Phase dates are offsets (in days) from the
project planned date.
"""
import logging

from tracura.domain.models.department import ContractorMode
from tracura.domain.models.template import (
    ProjectTemplate,
    TemplateDepartment,
    TemplateLineItem,
    TemplatePhase,
    TemplateSummary,
)

logger = logging.getLogger(__name__)

CONSTRUCTION = "Construction"
INTERIOR_DESIGN = "Interior Design"
MEDIA = "Media"

KNOWN_BUSINESS_TYPES = (CONSTRUCTION, INTERIOR_DESIGN, MEDIA)

TURNKEY = ContractorMode.TURNKEY
LABOUR_ONLY = ContractorMode.LABOUR_ONLY


def _labour(spec: str, quantity: str, unit_price: str, uom: str = "Day") -> TemplateLineItem:
    return TemplateLineItem("Labour", "Men & Women", spec, quantity, unit_price, uom)


BUILTIN_TEMPLATES: tuple[ProjectTemplate, ...] = (
    ProjectTemplate(
        id="residential_building",
        name="Residential Building",
        description="Standard template for residential building construction projects",
        location="Bengaluru",
        business_types=(CONSTRUCTION,),
        phases=(
            TemplatePhase(
                "Foundation",
                start_offset_days=0,
                duration_days=45,
                categories=("Civil",),
                departments=(
                    TemplateDepartment("Excavation", LABOUR_ONLY, (
                        _labour("Unskilled", "120", "650"),
                        TemplateLineItem("Machines & eq", "JCB", "Per-day hire", "10", "9,500", "Day"),
                    )),
                    TemplateDepartment("Concrete Works", TURNKEY, (
                        TemplateLineItem("Raw material", "Cement", "OPC 53", "400", "410", "Bag"),
                        TemplateLineItem("Raw material", "Steel", "Fe500 • 12 mm", "6", "62,000", "Ton"),
                        _labour("Mason", "60", "1,100"),
                    )),
                ),
            ),
            TemplatePhase(
                "Superstructure",
                start_offset_days=46,
                duration_days=120,
                categories=("Civil", "Electrical"),
                departments=(
                    TemplateDepartment("Masonry", LABOUR_ONLY, (
                        _labour("Mason", "180", "1,100"),
                        _labour("Helper", "180", "700"),
                    )),
                    TemplateDepartment("Electrical", TURNKEY, (
                        TemplateLineItem("Electrical", "Wires & Cables", "2.5 sq mm", "40", "1,850", "Coil"),
                        TemplateLineItem("Electrical", "MCB & DB", "Distribution Board", "4", "3,200", "Nos"),
                    )),
                    TemplateDepartment("Plumbing", LABOUR_ONLY, (
                        _labour("Skilled", "45", "1,000"),
                    )),
                ),
            ),
        ),
    ),
    ProjectTemplate(
        id="commercial_office",
        name="Commercial Office",
        description="Template for commercial office space construction and fit-out",
        location="Mumbai",
        allow_template_overrides=True,
        business_types=(CONSTRUCTION, INTERIOR_DESIGN),
        phases=(
            TemplatePhase(
                "Core & Shell",
                start_offset_days=0,
                duration_days=90,
                departments=(
                    TemplateDepartment("Structure", TURNKEY, (
                        TemplateLineItem("Raw material", "Cement", "OPC 53", "1,200", "410", "Bag"),
                        TemplateLineItem("Raw material", "Steel", "Fe500 • 16 mm", "18", "61,500", "Ton"),
                    )),
                    TemplateDepartment("Site Labour", LABOUR_ONLY, (
                        _labour("Semi-skilled", "600", "800"),
                    )),
                    TemplateDepartment("Equipment", TURNKEY, (
                        TemplateLineItem("Machines & eq", "Concrete Mixer", "Per-day hire", "60", "2,500", "Day"),
                    )),
                ),
            ),
            TemplatePhase(
                "Fit-out",
                start_offset_days=91,
                duration_days=60,
                departments=(
                    TemplateDepartment("Electrical", TURNKEY, (
                        TemplateLineItem("Electrical", "Lighting", "LED Panel", "220", "1,450", "Nos"),
                        TemplateLineItem("Electrical", "Switches & Sockets", "Modular switches", "300", "240", "Nos"),
                    )),
                    TemplateDepartment("Interiors", LABOUR_ONLY, (
                        _labour("Skilled", "240", "1,200"),
                    )),
                    TemplateDepartment("HVAC", TURNKEY, (
                        _labour("Skilled", "90", "1,300"),
                    )),
                ),
            ),
        ),
    ),
    ProjectTemplate(
        id="road_infrastructure",
        name="Road Infrastructure",
        description="Template for road construction and infrastructure projects",
        business_types=(CONSTRUCTION,),
        phases=(
            TemplatePhase(
                "Earthwork",
                start_offset_days=0,
                duration_days=60,
                departments=(
                    TemplateDepartment("Excavation", LABOUR_ONLY, (
                        TemplateLineItem("Machines & eq", "JCB", "Per-hour hire", "400", "1,200", "Hour"),
                        TemplateLineItem("Machines & eq", "Tractor / Trolley", "Per-trip", "350", "900", "Trip"),
                    )),
                    TemplateDepartment("Survey", LABOUR_ONLY, (
                        _labour("Skilled", "20", "1,500"),
                    )),
                ),
            ),
            TemplatePhase(
                "Paving",
                start_offset_days=61,
                duration_days=75,
                departments=(
                    TemplateDepartment("Sub-base", TURNKEY, (
                        TemplateLineItem("Raw material", "Sand", "River Sand (Coarse)", "900", "55", "Cft"),
                        TemplateLineItem("Raw material", "Cement", "PPC", "700", "380", "Bag"),
                    )),
                    TemplateDepartment("Paving Crew", LABOUR_ONLY, (
                        _labour("Unskilled", "500", "650"),
                        TemplateLineItem("Machines & eq", "Vibrator", "Per-day hire", "40", "800", "Day"),
                    )),
                ),
            ),
        ),
    ),
    ProjectTemplate(
        id="renovation",
        name="Renovation",
        description="Template for building renovation and remodeling projects",
        business_types=(CONSTRUCTION, INTERIOR_DESIGN),
        phases=(
            TemplatePhase(
                "Demolition",
                start_offset_days=0,
                duration_days=15,
                departments=(
                    TemplateDepartment("Demolition", LABOUR_ONLY, (
                        _labour("Unskilled", "40", "650"),
                    )),
                    TemplateDepartment("Debris Removal", LABOUR_ONLY, (
                        TemplateLineItem("Machines & eq", "Tractor / Trolley", "Per-trip", "25", "1,100", "Trip"),
                    )),
                ),
            ),
            TemplatePhase(
                "Remodeling",
                start_offset_days=16,
                duration_days=45,
                departments=(
                    TemplateDepartment("Civil Repairs", TURNKEY, (
                        TemplateLineItem("Raw material", "Cement", "OPC 43", "80", "395", "Bag"),
                        _labour("Mason", "30", "1,100"),
                    )),
                    TemplateDepartment("Rewiring", TURNKEY, (
                        TemplateLineItem("Electrical", "Wires & Cables", "1.5 sq mm", "12", "1,250", "Coil"),
                        TemplateLineItem("Electrical", "Conduits & Accessories", "25mm PVC", "60", "95", "Meter"),
                    )),
                ),
            ),
        ),
    ),
)


class BuiltinTemplateCatalog:
    """
    Static template registry.

    Implements TemplateCatalog protocol. Business types outside
    KNOWN_BUSINESS_TYPES (or None) return the full catalog.
    """

    def __init__(self, templates: tuple[ProjectTemplate, ...] = BUILTIN_TEMPLATES):
        self._templates = {t.id: t for t in templates}
        logger.debug(f"BuiltinTemplateCatalog loaded {len(self._templates)} templates")

    def list_templates(self, business_type: str | None = None) -> list[TemplateSummary]:
        known = {bt.lower() for bt in KNOWN_BUSINESS_TYPES}
        filter_by = business_type if business_type and business_type.strip().lower() in known else None
        templates = [t for t in self._templates.values() if t.matches_business_type(filter_by)]
        return sorted((t.summary() for t in templates), key=lambda s: s.name)

    def get_template(self, template_id: str) -> ProjectTemplate | None:
        return self._templates.get(template_id)
