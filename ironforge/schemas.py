"""
Data model shared by the calculators, the quotation builder and the API.

JSON uses camelCase keys (what the configurator UI sends); Python code uses
the snake_case attribute names. Both are accepted on input.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .config import settings


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# --- Enums ---

class Unit(str, Enum):
    MM = "mm"
    CM = "cm"
    IN = "in"
    FT = "ft"


class GateType(str, Enum):
    SLIDING = "sliding"
    OPENABLE = "openable"
    FIXED = "fixed"
    SLIDING_OPENABLE = "sliding-openable"


class InnerDesign(str, Enum):
    VERTICAL_BARS = "vertical-bars"
    HORIZONTAL_BARS = "horizontal-bars"
    CRISS_CROSS = "criss-cross"
    SHEET = "sheet"


class WindowCellType(str, Enum):
    FIXED = "fixed"
    SLIDING = "sliding"
    CASEMENT = "casement"
    TOP_HUNG = "top-hung"
    GLASS = "glass"


class FittingType(str, Enum):
    HANDLE = "handle"
    HINGE = "hinge"


class WindowProfileCategory(str, Enum):
    OUTER_FRAME = "outer-frame"
    VERTICAL_MULLION = "vertical-mullion"
    HORIZONTAL_MULLION = "horizontal-mullion"
    SHUTTER_HANDLE = "shutter-handle"
    SHUTTER_INTERLOCK = "shutter-interlock"
    SHUTTER_TOP_BOTTOM = "shutter-top-bottom"
    CASEMENT_FRAME = "casement-frame"
    CASEMENT_SASH = "casement-sash"
    FIXED_SASH = "fixed-sash"


class RateUnit(str, Enum):
    KG = "kg"
    SQFT = "sqft"
    SQM = "sqm"


class InstallationUnit(str, Enum):
    LUMPSUM = "lumpsum"
    KG = "kg"
    SQFT = "sqft"
    SQM = "sqm"


class ProductType(str, Enum):
    GATE = "gate"
    WINDOW = "window"


class UnitBasis(str, Enum):
    PER_METER = "per_meter"
    PER_SQ_METER = "per_sq_meter"


# --- Profile reference rows ---

class Profile(FrozenCamelModel):
    """Gate/grill cross-section. Sheet stock stores kg per sq m in weight_kg_per_meter."""
    id: str
    name: str
    weight_kg_per_meter: float
    width_mm: float
    height_mm: float
    wall_thickness_mm: float = 0.0
    unit_basis: UnitBasis = UnitBasis.PER_METER

    @property
    def is_placeholder(self) -> bool:
        """The "Select Profile" row: no size, no weight."""
        return self.width_mm == 0 and self.height_mm == 0 and self.weight_kg_per_meter == 0


class WindowProfile(FrozenCamelModel):
    id: str
    name: str
    category: WindowProfileCategory
    width_mm: float
    height_mm: float
    weight_kg_per_meter: float
    standard_length_m: float = 6.0


# --- Gate ---

class InnerDesignStep(CamelModel):
    profile_id: str
    gap: float  # display unit, not mm


class DoorDesign(CamelModel):
    inner_design: InnerDesign = InnerDesign.VERTICAL_BARS
    inner_design_sequence: List[InnerDesignStep] = []
    color: str = "#374151"
    texture: str = ""


class GateConfig(CamelModel):
    width: float
    height: float
    unit: Unit = Unit.MM
    gate_type: GateType = GateType.SLIDING
    frame_profile_id: str
    frame_color: str = "#212121"
    frame_texture: str = ""
    left_door_width: Optional[float] = None
    left_door_design: DoorDesign
    right_door_design: Optional[DoorDesign] = None

    @model_validator(mode="after")
    def _check_door_split(self):
        if (
            self.gate_type == GateType.SLIDING_OPENABLE
            and self.left_door_width
            and self.left_door_width >= self.width
        ):
            raise ValueError(
                f"left_door_width ({self.left_door_width}) must be smaller "
                f"than the gate width ({self.width})"
            )
        return self

    def effective_left_door_width(self) -> float:
        """Left door width in display units; unset (or 0) means half the gate."""
        return self.left_door_width or self.width / 2

    def right_door_width(self) -> float:
        return self.width - self.effective_left_door_width()

    def effective_right_design(self) -> DoorDesign:
        """Only sliding-openable gates carry an independent right door design."""
        if self.gate_type == GateType.SLIDING_OPENABLE and self.right_door_design is not None:
            return self.right_door_design
        return self.left_door_design


# --- Window ---

class Fitting(CamelModel):
    id: str
    type: FittingType
    x: float = Field(default=0.5, ge=0.0, le=1.0)
    y: float = Field(default=0.5, ge=0.0, le=1.0)
    size: float = 1.0
    rotation: float = 0.0


class GridCell(CamelModel):
    id: str
    type: WindowCellType = WindowCellType.FIXED
    has_mesh: bool = False
    fittings: List[Fitting] = []

    @classmethod
    def default(cls, row: int, col: int) -> "GridCell":
        return cls(id=cell_id(row, col))


def cell_id(row: int, col: int) -> str:
    return f"r{row}c{col}"


class WindowFrameProfiles(CamelModel):
    outer_frame: str
    vertical_mullion: str
    horizontal_mullion: str


class WindowShutterProfiles(CamelModel):
    handle_section: str
    top_bottom_section: str
    interlock_section: str
    casement_sash: str


class WindowConfig(CamelModel):
    width: float
    height: float
    unit: Unit = Unit.MM
    row_sizes: List[float]
    col_sizes: List[float]
    grid: List[List[GridCell]]
    glass_thickness_mm: float = 5.0
    frame_profiles: WindowFrameProfiles
    shutter_profiles: WindowShutterProfiles
    color: str = "#E5E7EB"
    texture: str = ""
    grill_config: Optional[GateConfig] = None

    @model_validator(mode="after")
    def _check_grid_shape(self):
        if len(self.grid) != len(self.row_sizes):
            raise ValueError(
                f"grid has {len(self.grid)} rows but row_sizes has {len(self.row_sizes)} entries"
            )
        for r, row in enumerate(self.grid):
            if len(row) != len(self.col_sizes):
                raise ValueError(
                    f"grid row {r} has {len(row)} cells but col_sizes has "
                    f"{len(self.col_sizes)} entries"
                )
        return self


# --- Engine output ---

class HardwareLine(CamelModel):
    """Engine-derived hardware quantity. Informational, never priced."""
    name: str
    quantity: float
    unit: str


class CalculationResult(CamelModel):
    width_mm: float
    height_mm: float
    area_sq_m: float
    area_sq_ft: float
    total_weight_kg: float
    hardware: Optional[List[HardwareLine]] = None


# --- Quotation ---

class HardwareItem(CamelModel):
    """Manually entered, priced hardware line on a quote."""
    id: str
    name: str = ""
    quantity: float = 1
    unit: str = "pcs"
    rate: float = 0.0
    is_calculated: bool = False


class InstallationCharge(CamelModel):
    rate: float = 0.0
    unit: InstallationUnit = InstallationUnit.LUMPSUM


class _QuotationItemBase(FrozenCamelModel):
    id: str
    calculations: CalculationResult
    grill_calculations: Optional[CalculationResult] = None
    quantity: int = 1
    rate: float = 0.0
    rate_unit: RateUnit = RateUnit.SQFT
    grill_rate: Optional[float] = None
    grill_rate_unit: Optional[RateUnit] = None
    structure_cost: float = 0.0
    description: str = ""
    preview_image: Optional[str] = None


class GateQuotationItem(_QuotationItemBase):
    product_type: Literal["gate"] = "gate"
    config: GateConfig


class WindowQuotationItem(_QuotationItemBase):
    product_type: Literal["window"] = "window"
    config: WindowConfig


QuotationItem = Annotated[
    Union[GateQuotationItem, WindowQuotationItem],
    Field(discriminator="product_type"),
]


class BankDetails(CamelModel):
    name: str = Field(default_factory=lambda: settings.COMPANY_NAME)
    account: str = ""
    bank: str = ""
    branch: str = ""
    ifsc: str = ""


class CompanyDetails(CamelModel):
    name: str = Field(default_factory=lambda: settings.COMPANY_NAME)
    logo: str = ""
    gst: str = Field(default_factory=lambda: settings.COMPANY_GST)
    address: str = Field(default_factory=lambda: settings.COMPANY_ADDRESS)
    website: str = Field(default_factory=lambda: settings.COMPANY_WEBSITE)
    email: str = Field(default_factory=lambda: settings.COMPANY_EMAIL)
    contact: str = Field(default_factory=lambda: settings.COMPANY_PHONE)
    bank_details: BankDetails = Field(default_factory=BankDetails)


class CustomerDetails(CamelModel):
    name: str = "Valued Customer"
    address: str = "Project Site Address"


class QuoteMetaDetails(CamelModel):
    title: str = "Custom Iron Gate Quotation"
    description: str = (
        "Supply and installation of custom-designed iron gate as per the "
        "specified design and dimensions."
    )
    terms: str = Field(default_factory=lambda: settings.QUOTE_TERMS)


class QuoteDetails(CamelModel):
    company: CompanyDetails = Field(default_factory=CompanyDetails)
    customer: CustomerDetails = Field(default_factory=CustomerDetails)
    meta: QuoteMetaDetails = Field(default_factory=QuoteMetaDetails)
    items: List[QuotationItem] = []
    hardware: List[HardwareItem] = []
    installation: InstallationCharge = Field(default_factory=InstallationCharge)


class QuoteTotals(CamelModel):
    structure_total: float
    hardware_total: float
    installation_total: float
    grand_total: float
    total_weight_kg: float
    total_area_sq_ft: float
    total_area_sq_m: float


# --- Starting configurations ---

def default_gate_config() -> GateConfig:
    """3000 x 1500 mm sliding gate, 40x40x2 frame, 20x20x2 bars every 100 mm."""
    design = DoorDesign(
        inner_design=InnerDesign.VERTICAL_BARS,
        inner_design_sequence=[InnerDesignStep(profile_id="p7", gap=100)],
    )
    return GateConfig(
        width=3000,
        height=1500,
        unit=Unit.MM,
        gate_type=GateType.SLIDING,
        frame_profile_id="p26",
        left_door_width=1000,
        left_door_design=design,
        right_door_design=design.model_copy(deep=True),
    )


def default_window_config() -> WindowConfig:
    """2400 x 1200 mm, one row of three equal panels: fixed, sliding, sliding."""
    grid = [[GridCell.default(0, c) for c in range(3)]]
    grid[0][1].type = WindowCellType.SLIDING
    grid[0][2].type = WindowCellType.SLIDING
    return WindowConfig(
        width=2400,
        height=1200,
        unit=Unit.MM,
        row_sizes=[1],
        col_sizes=[1, 1, 1],
        grid=grid,
        frame_profiles=WindowFrameProfiles(
            outer_frame="wp_of_1",
            vertical_mullion="wp_vm_1",
            horizontal_mullion="wp_hm_1",
        ),
        shutter_profiles=WindowShutterProfiles(
            handle_section="wp_sh_1",
            top_bottom_section="wp_st_1",
            interlock_section="wp_si_1",
            casement_sash="wp_cs_1",
        ),
    )
