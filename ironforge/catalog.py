"""
Profile reference data and lookup.

Gate/grill rows are mild-steel hollow sections sold by kg/m. Sheet rows store
kg per square meter in the same weight column and are tagged per_sq_meter.
Window rows are aluminium sections grouped by the role they play in a frame.

Lookups never raise: an unknown id returns None and the calculators treat it
as a zero contribution.
"""

from typing import Iterable, List, Optional

from .schemas import Profile, UnitBasis, WindowProfile, WindowProfileCategory

# Fill stock for the "sheet" inner design, not user selectable
SHEET_FILL_PROFILE_ID = "sheet-1.5"

# id: (width_mm, height_mm, wall_thickness_mm, kg_per_meter)
_TUBE_DATA = {
    # Square tube
    "p1": (12, 12, 1.6, 0.47),
    "p2": (12, 12, 2.0, 0.55),
    "p3": (15, 15, 1.6, 0.62),
    "p4": (15, 15, 2.0, 0.74),
    "p5": (15, 15, 2.2, 0.79),
    "p6": (20, 20, 1.6, 0.87),
    "p7": (20, 20, 2.0, 1.05),
    "p8": (20, 20, 2.2, 1.13),
    "p9": (20, 20, 2.6, 1.29),
    "p10": (25, 25, 1.6, 1.12),
    "p11": (25, 25, 2.0, 1.37),
    "p12": (25, 25, 2.2, 1.48),
    "p13": (25, 25, 2.6, 1.70),
    "p14": (25, 25, 2.9, 1.84),
    "p15": (30, 30, 1.6, 1.37),
    "p16": (30, 30, 2.0, 1.68),
    "p17": (30, 30, 2.2, 1.82),
    "p18": (30, 30, 2.6, 2.10),
    "p19": (30, 30, 2.9, 2.30),
    "p20": (30, 30, 3.0, 2.36),
    # Rectangular tube
    "p21": (40, 20, 1.6, 1.37),
    "p22": (40, 20, 2.0, 1.68),
    "p23": (50, 25, 1.6, 1.75),
    "p24": (50, 25, 2.0, 2.15),
    # Heavy square tube
    "p25": (40, 40, 1.6, 1.88),
    "p26": (40, 40, 2.0, 2.31),
    "p27": (40, 40, 3.0, 3.30),
    "p28": (50, 50, 1.6, 2.38),
    "p29": (50, 50, 2.0, 2.94),
    "p30": (50, 50, 3.0, 4.25),
    # Heavy rectangular tube
    "p31": (60, 40, 2.0, 2.94),
    "p32": (60, 40, 3.0, 4.25),
    "p33": (75, 50, 2.0, 3.72),
    "p34": (75, 50, 3.0, 5.42),
    "p35": (100, 50, 3.0, 6.60),
}

# id: (thickness_mm, kg_per_sq_meter)
_SHEET_DATA = {
    "sheet-1.5": (1.5, 11.78),
    "sheet-2.0": (2.0, 15.70),
    "sheet-3.0": (3.0, 23.55),
}


def _fmt_mm(value: float) -> str:
    return f"{value:g}"


def _build_gate_profiles() -> List[Profile]:
    rows = [Profile(
        id="p0", name="Select Profile",
        weight_kg_per_meter=0, width_mm=0, height_mm=0, wall_thickness_mm=0,
    )]
    for pid, (w, h, t, kg) in _TUBE_DATA.items():
        rows.append(Profile(
            id=pid,
            name=f"{_fmt_mm(w)}x{_fmt_mm(h)}x{_fmt_mm(t)} mm",
            weight_kg_per_meter=kg,
            width_mm=w,
            height_mm=h,
            wall_thickness_mm=t,
        ))
    for pid, (t, kg) in _SHEET_DATA.items():
        rows.append(Profile(
            id=pid,
            name=f"{_fmt_mm(t)}mm MS Sheet",
            weight_kg_per_meter=kg,
            width_mm=t,
            height_mm=t,
            wall_thickness_mm=t,
            unit_basis=UnitBasis.PER_SQ_METER,
        ))
    return rows


GATE_PROFILES: List[Profile] = _build_gate_profiles()

_C = WindowProfileCategory
WINDOW_PROFILES: List[WindowProfile] = [
    WindowProfile(id="wp_of_1", name="2.5 Track Outer Frame (60x55)",
                  category=_C.OUTER_FRAME, width_mm=60, height_mm=55, weight_kg_per_meter=1.1),
    WindowProfile(id="wp_vm_1", name="Vertical Mullion (40x40)",
                  category=_C.VERTICAL_MULLION, width_mm=40, height_mm=40, weight_kg_per_meter=0.9),
    WindowProfile(id="wp_hm_1", name="Horizontal Mullion (40x40)",
                  category=_C.HORIZONTAL_MULLION, width_mm=40, height_mm=40, weight_kg_per_meter=0.9),
    WindowProfile(id="wp_sh_1", name="Shutter Handle (25x60)",
                  category=_C.SHUTTER_HANDLE, width_mm=25, height_mm=60, weight_kg_per_meter=0.85),
    WindowProfile(id="wp_si_1", name="Shutter Interlock (25x40)",
                  category=_C.SHUTTER_INTERLOCK, width_mm=25, height_mm=40, weight_kg_per_meter=0.75),
    WindowProfile(id="wp_st_1", name="Shutter Top/Bottom (25x40)",
                  category=_C.SHUTTER_TOP_BOTTOM, width_mm=25, height_mm=40, weight_kg_per_meter=0.80),
    WindowProfile(id="wp_cf_1", name="Casement Frame (45x50)",
                  category=_C.CASEMENT_FRAME, width_mm=45, height_mm=50, weight_kg_per_meter=1.0),
    WindowProfile(id="wp_cs_1", name="Casement Sash (45x60)",
                  category=_C.CASEMENT_SASH, width_mm=45, height_mm=60, weight_kg_per_meter=1.2),
]


class ProfileCatalog:
    """Read-only id -> Profile lookup for gate and grill sections."""

    def __init__(self, profiles: Iterable[Profile]):
        self._profiles = tuple(profiles)
        self._by_id = {p.id: p for p in self._profiles}

    def get(self, profile_id: Optional[str]) -> Optional[Profile]:
        return self._by_id.get(profile_id)

    def all(self) -> List[Profile]:
        return list(self._profiles)

    def __contains__(self, profile_id) -> bool:
        return profile_id in self._by_id

    def __len__(self) -> int:
        return len(self._profiles)


class WindowProfileCatalog:
    """Read-only id -> WindowProfile lookup, filterable by role."""

    def __init__(self, profiles: Iterable[WindowProfile]):
        self._profiles = tuple(profiles)
        self._by_id = {p.id: p for p in self._profiles}

    def get(self, profile_id: Optional[str]) -> Optional[WindowProfile]:
        return self._by_id.get(profile_id)

    def all(self) -> List[WindowProfile]:
        return list(self._profiles)

    def by_category(self, category) -> List[WindowProfile]:
        category = WindowProfileCategory(category)
        return [p for p in self._profiles if p.category == category]

    def __contains__(self, profile_id) -> bool:
        return profile_id in self._by_id

    def __len__(self) -> int:
        return len(self._profiles)


def default_gate_catalog() -> ProfileCatalog:
    return ProfileCatalog(GATE_PROFILES)


def default_window_catalog() -> WindowProfileCatalog:
    return WindowProfileCatalog(WINDOW_PROFILES)
