"""Turn an XKT calibration-kit description into what an HP8753 needs.

The analyzer knows up to eight numbered standards and a fixed set of
calibration classes, each naming the standards it is made of.  XKT files
describe a superset of this, so only the parts the analyzer can use are
kept.  A response class and a response-plus-isolation class have no XKT
counterpart and are put together from the reflection and forward
transmission classes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from os import PathLike
from typing import Union

from vnakit.xkt import (
    ConnectorType,
    KitClassID,
    StandardType,
    XktCalKit,
    parse_xkt_file,
)

__all__ = [
    "MAX_CAL_STANDARDS",
    "MAX_CAL_LABEL_SIZE",
    "MAX_CALKIT_LABEL_SIZE",
    "MAX_CALKIT_DESCRIPTION_SIZE",
    "ORDER_OPEN_CORR_POLYNOMIAL",
    "CalibrationClassID",
    "CalibrationStandard",
    "CalibrationClass",
    "HP8753CalibrationKit",
    "build_calibration_kit",
    "load_calibration_kit",
]

log = logging.getLogger(__name__)

MAX_CAL_STANDARDS = 8
MAX_CAL_LABEL_SIZE = 10
MAX_CALKIT_LABEL_SIZE = 40
MAX_CALKIT_DESCRIPTION_SIZE = 80
ORDER_OPEN_CORR_POLYNOMIAL = 4

# Room for "n,n,...": two characters per standard.
_CLASS_STANDARDS_SIZE = MAX_CAL_STANDARDS * 2
# The synthesized response class may join three lists.
_RESPONSE_STANDARDS_SIZE = MAX_CAL_STANDARDS * 2 + 10
_RESPONSE_LABEL = "RESPONSE"


class CalibrationClassID(enum.Enum):
    S11A = enum.auto()
    S11B = enum.auto()
    S11C = enum.auto()
    S22A = enum.auto()
    S22B = enum.auto()
    S22C = enum.auto()
    FWD_TRANS = enum.auto()
    FWD_MATCH = enum.auto()
    REV_TRANS = enum.auto()
    REV_MATCH = enum.auto()
    RESPONSE = enum.auto()
    RESPONSE_AND_ISOLATION = enum.auto()
    TRL_REFLECT_FWD_MATCH = enum.auto()
    TRL_LINE_FWD_TRANS = enum.auto()
    TRL_LINE_FWD_MATCH = enum.auto()
    TRL_LINE_REV_TRANS = enum.auto()
    TRL_LINE_REV_MATCH = enum.auto()
    TRL_THRU_FWD_TRANS = enum.auto()
    TRL_THRU_FWD_MATCH = enum.auto()
    TRL_THRU_REV_TRANS = enum.auto()
    TRL_THRU_REV_MATCH = enum.auto()


C = CalibrationClassID

_KIT_CLASS_TARGETS: dict[KitClassID, tuple[CalibrationClassID, ...]] = {
    KitClassID.SA: (C.S11A, C.S22A),
    KitClassID.SB: (C.S11B, C.S22B),
    KitClassID.SC: (C.S11C, C.S22C),
    KitClassID.FORWARD_THRU: (C.FWD_TRANS,),
    KitClassID.FORWARD_MATCH: (C.FWD_MATCH,),
    KitClassID.REVERSE_THRU: (C.REV_TRANS,),
    KitClassID.REVERSE_MATCH: (C.REV_MATCH,),
    KitClassID.TRL_REFLECT: (C.TRL_REFLECT_FWD_MATCH,),
    KitClassID.TRL_LINE: (
        C.TRL_LINE_FWD_TRANS,
        C.TRL_LINE_FWD_MATCH,
        C.TRL_LINE_REV_TRANS,
        C.TRL_LINE_REV_MATCH,
    ),
    KitClassID.TRL_THRU: (
        C.TRL_THRU_FWD_TRANS,
        C.TRL_THRU_FWD_MATCH,
        C.TRL_THRU_REV_TRANS,
        C.TRL_THRU_REV_MATCH,
    ),
}


@dataclass
class CalibrationStandard:
    """One of the analyzer's numbered calibration standards."""

    specified: bool = False
    connector_type: ConnectorType = ConnectorType.UNKNOWN
    calibration_type: StandardType = StandardType.UNKNOWN
    label: str = ""
    max_freq_hz: int = 0
    min_freq_hz: int = 0
    offset_delay: float = 0.0
    offset_loss: float = 0.0
    offset_z0: float = 0.0
    c: list[float] = field(default_factory=lambda: [0.0] * ORDER_OPEN_CORR_POLYNOMIAL)
    arbitrary_z0: float = 0.0


@dataclass
class CalibrationClass:
    """A calibration class: its label and the standards it uses."""

    specified: bool = False
    label: str = ""
    standards: str = ""


def _empty_standards() -> list[CalibrationStandard]:
    return [CalibrationStandard() for _ in range(MAX_CAL_STANDARDS)]


def _empty_classes() -> dict[CalibrationClassID, CalibrationClass]:
    return {class_id: CalibrationClass() for class_id in CalibrationClassID}


@dataclass
class HP8753CalibrationKit:
    """A calibration kit in the form the analyzer is programmed with."""

    label: str = ""
    description: str = ""
    standards: list[CalibrationStandard] = field(default_factory=_empty_standards)
    classes: dict[CalibrationClassID, CalibrationClass] = field(default_factory=_empty_classes)
    valid: bool = True

    def specified_classes(self) -> dict[CalibrationClassID, CalibrationClass]:
        """The classes that the kit defines, in class order."""
        return {
            class_id: cal_class
            for class_id, cal_class in self.classes.items()
            if cal_class.specified
        }


def _connector_type_for(xkt: XktCalKit, port_ids: list[str]) -> ConnectorType:
    connector_type = ConnectorType.UNKNOWN
    # The earliest port ID that names a known connector decides the type;
    # among equal descriptors the last connector listed is used.
    for port_id in reversed(port_ids):
        match = next(
            (c for c in reversed(xkt.connectors) if c.descriptor() == port_id),
            None,
        )
        if match is not None:
            connector_type = match.type
    return connector_type


def build_calibration_kit(xkt: XktCalKit) -> HP8753CalibrationKit:
    """Extract the analyzer's view of a parsed XKT calibration kit."""
    kit = HP8753CalibrationKit(
        label=(xkt.label or "")[: MAX_CALKIT_LABEL_SIZE - 1],
        description=(xkt.description or "")[: MAX_CALKIT_DESCRIPTION_SIZE - 1],
    )

    # Later entries are processed first so that the first definition of a
    # standard number in the document is the one that stays.
    for xkt_standard in reversed(xkt.standards):
        if not 1 <= xkt_standard.number <= MAX_CAL_STANDARDS:
            kit.valid = False
            continue
        standard = CalibrationStandard(
            specified=True,
            connector_type=_connector_type_for(xkt, xkt_standard.port_connector_ids),
            calibration_type=xkt_standard.type,
            label=(xkt_standard.label or "")[:MAX_CAL_LABEL_SIZE],
            max_freq_hz=xkt_standard.max_freq_hz,
            min_freq_hz=xkt_standard.min_freq_hz,
            offset_delay=xkt_standard.offset.delay,
            offset_loss=xkt_standard.offset.loss,
            offset_z0=xkt_standard.offset.z0,
        )
        if standard.calibration_type is StandardType.OPEN:
            standard.c = list(xkt_standard.c[:ORDER_OPEN_CORR_POLYNOMIAL])
        elif standard.calibration_type is StandardType.ARBITRARY_IMPEDANCE_LOAD:
            standard.arbitrary_z0 = xkt_standard.termination_impedance.real
            # The analyzer only accepts real arbitrary impedances.
            if xkt_standard.termination_impedance.imag != 0.0:
                kit.valid = False
        elif standard.calibration_type is StandardType.UNKNOWN:
            kit.valid = False
        kit.standards[xkt_standard.number - 1] = standard

    for kit_class in reversed(xkt.kit_classes):
        for class_id in _KIT_CLASS_TARGETS.get(kit_class.class_id, ()):
            target = kit.classes[class_id]
            target.specified = True
            if kit_class.label is not None:
                target.label = kit_class.label[:MAX_CAL_LABEL_SIZE]
            if kit_class.standards is not None:
                target.standards = kit_class.standards[:_CLASS_STANDARDS_SIZE]

    _synthesize_response(kit)

    for class_id, cal_class in kit.specified_classes().items():
        log.debug("Cal class %-10s: %s", cal_class.label, cal_class.standards)

    return kit


def _synthesize_response(kit: HP8753CalibrationKit) -> None:
    response = kit.classes[CalibrationClassID.RESPONSE]
    response.label = _RESPONSE_LABEL
    parts = [
        kit.classes[class_id].standards
        for class_id in (C.S11A, C.S11B, C.FWD_TRANS)
        if kit.classes[class_id].specified
    ]
    if parts:
        response.specified = True
        response.standards = ",".join(parts)[:_RESPONSE_STANDARDS_SIZE]

        with_isolation = kit.classes[CalibrationClassID.RESPONSE_AND_ISOLATION]
        with_isolation.specified = True
        with_isolation.standards = response.standards[:_CLASS_STANDARDS_SIZE]
        with_isolation.label = _RESPONSE_LABEL


def load_calibration_kit(path: Union[str, "PathLike[str]"]) -> HP8753CalibrationKit:
    """Read an XKT file and build the analyzer's calibration kit from it."""
    return build_calibration_kit(parse_xkt_file(path))