"""Reader for XKT calibration-kit description files.

An XKT file is an XML document rooted at ``<CalKit>`` that lists the
connectors, the calibration standards and the kit classes of a
calibration kit.
"""

from __future__ import annotations

import enum
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from os import PathLike
from typing import Optional, Union

__all__ = [
    "ConnectorType",
    "StandardType",
    "KitClassID",
    "Connector",
    "Offset",
    "Standard",
    "KitClass",
    "XktCalKit",
    "XktParseError",
    "ascii_to_int",
    "ascii_to_float",
    "parse_xkt",
    "parse_xkt_file",
]


class XktParseError(ValueError):
    """Raised when an XKT document is not well-formed XML."""


class ConnectorType(enum.Enum):
    UNKNOWN = "unknown"
    COAXIAL = "Coaxial"
    WAVEGUIDE = "Waveguide"


class StandardType(enum.Enum):
    UNKNOWN = "unknown"
    FIXED_LOAD = "FixedLoadStandard"
    SLIDING_LOAD = "SlidingLoadStandard"
    ARBITRARY_IMPEDANCE_LOAD = "ArbitraryImpedanceStandard"
    OPEN = "OpenStandard"
    SHORT = "ShortStandard"
    THRU = "ThruStandard"


class KitClassID(enum.Enum):
    UNKNOWN = "unknown"
    SA = "SA"
    SB = "SB"
    SC = "SC"
    FORWARD_THRU = "FORWARD_THRU"
    FORWARD_MATCH = "FORWARD_MATCH"
    REVERSE_THRU = "REVERSE_THRU"
    REVERSE_MATCH = "REVERSE_MATCH"
    ISOLATION = "ISOLATION"
    TRL_THRU = "TRL_THRU"
    TRL_REFLECT = "TRL_REFLECT"
    TRL_LINE = "TRL_LINE"
    TRL_MATCH = "TRL_MATCH"

    @classmethod
    def from_text(cls, text: str) -> "KitClassID":
        if text == cls.UNKNOWN.value:
            return cls.UNKNOWN
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class Connector:
    """A connector family and gender from the ``ConnectorList``."""

    type: ConnectorType = ConnectorType.UNKNOWN
    family: Optional[str] = None
    gender: Optional[str] = None
    max_freq_hz: int = 0
    min_freq_hz: int = 0
    cutoff_freq_hz: int = 0
    height_width_ratio: float = 0.0
    system_z0: float = 0.0

    def descriptor(self) -> str:
        """The ``"family gender"`` string that standards refer to."""
        family = (self.family or "").strip()
        gender = (self.gender or "").strip()
        return f"{family} {gender}"


@dataclass
class Offset:
    delay: float = 0.0
    loss: float = 0.0
    z0: float = 0.0


@dataclass
class Standard:
    """One calibration standard from the ``StandardList``."""

    type: StandardType = StandardType.UNKNOWN
    label: Optional[str] = None
    description: Optional[str] = None
    port_connector_ids: list[str] = field(default_factory=list)
    max_freq_hz: int = 0
    min_freq_hz: int = 0
    number: int = 0
    l: list[float] = field(default_factory=lambda: [0.0] * 4)
    c: list[float] = field(default_factory=lambda: [0.0] * 4)
    offset: Offset = field(default_factory=Offset)
    termination_impedance: complex = 0j


@dataclass
class KitClass:
    """A ``KitClasses`` entry: which standards make up a calibration class."""

    class_id: KitClassID = KitClassID.UNKNOWN
    standards: Optional[str] = None
    label: Optional[str] = None


@dataclass
class XktCalKit:
    """Everything read from an XKT document."""

    label: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    trl_ref_plane: Optional[str] = None
    trl_zref: Optional[str] = None
    lrl_auto_characterization: Optional[str] = None
    connectors: list[Connector] = field(default_factory=list)
    standards: list[Standard] = field(default_factory=list)
    kit_classes: list[KitClass] = field(default_factory=list)


_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def ascii_to_int(text: str) -> int:
    """Read a leading base-10 integer; 0 when there is none."""
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def ascii_to_float(text: str) -> float:
    """Read a leading floating-point number; 0.0 when there is none."""
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


_META_FIELDS = {
    "CalKitLabel": "label",
    "CalKitVersion": "version",
    "CalKitDescription": "description",
    "TRLRefPlane": "trl_ref_plane",
    "TRLZref": "trl_zref",
    "LRLAutoCharacterization": "lrl_auto_characterization",
}

_CONNECTOR_TYPES = {
    "Coaxial": ConnectorType.COAXIAL,
    "Waveguide": ConnectorType.WAVEGUIDE,
}

_STANDARD_TYPES = {t.value: t for t in StandardType if t is not StandardType.UNKNOWN}


def _local(tag: str) -> str:
    return tag.rpartition("}")[2]


def _parse_connector(element: ET.Element) -> Connector:
    connector = Connector(type=_CONNECTOR_TYPES.get(_local(element.tag), ConnectorType.UNKNOWN))
    if connector.type is ConnectorType.UNKNOWN:
        return connector
    for child in element:
        text = child.text
        if text is None:
            continue
        name = _local(child.tag)
        if name == "Family":
            connector.family = text
        elif name == "Gender":
            connector.gender = text
        elif name == "MaximumFrequencyHz":
            connector.max_freq_hz = ascii_to_int(text)
        elif name == "MinimumFrequencyHz":
            connector.min_freq_hz = ascii_to_int(text)
        elif name == "CutoffFrequencyHz":
            connector.cutoff_freq_hz = ascii_to_int(text)
        elif name in ("HeightWidthRatio", "HeightWidthRadio"):
            connector.height_width_ratio = ascii_to_float(text)
        elif name == "SystemZ0":
            connector.system_z0 = ascii_to_float(text)
    return connector


def _parse_offset(element: ET.Element, offset: Offset) -> None:
    for child in element:
        if child.text is None:
            continue
        name = _local(child.tag)
        if name == "OffsetDelay":
            offset.delay = ascii_to_float(child.text)
        elif name == "OffsetLoss":
            offset.loss = ascii_to_float(child.text)
        elif name == "OffsetZ0":
            offset.z0 = ascii_to_float(child.text)


def _parse_termination(element: ET.Element, standard: Standard) -> None:
    value = standard.termination_impedance
    for child in element:
        if child.text is None:
            continue
        name = _local(child.tag)
        if name == "Real":
            value = complex(ascii_to_float(child.text), value.imag)
        elif name == "Imag":
            value = complex(value.real, ascii_to_float(child.text))
    standard.termination_impedance = value


def _parse_standard(element: ET.Element) -> Standard:
    standard = Standard(type=_STANDARD_TYPES.get(_local(element.tag), StandardType.UNKNOWN))
    if standard.type is StandardType.UNKNOWN:
        return standard
    for child in element:
        name = _local(child.tag)
        text = child.text
        if name == "Offset":
            _parse_offset(child, standard.offset)
            continue
        if name == "TerminationImpedance":
            _parse_termination(child, standard)
            continue
        if name == "PortConnectorIDs":
            if text is not None and text.strip():
                standard.port_connector_ids.append(text.strip())
            standard.port_connector_ids.extend(
                sub.text.strip() for sub in child if sub.text is not None and sub.text.strip()
            )
            continue
        if text is None:
            continue
        if name == "Label":
            standard.label = text
        elif name == "Description":
            standard.description = text
        elif name == "MaximumFrequencyHz":
            standard.max_freq_hz = ascii_to_int(text)
        elif name == "MinimumFrequencyHz":
            standard.min_freq_hz = ascii_to_int(text)
        elif name == "StandardNumber":
            standard.number = ascii_to_int(text)
        elif len(name) == 2 and name[0] in "LC" and name[1] in "0123":
            target = standard.l if name[0] == "L" else standard.c
            target[int(name[1])] = ascii_to_float(text)
    return standard


def _parse_kit_class(element: ET.Element) -> KitClass:
    kit_class = KitClass()
    for child in element:
        text = child.text
        if text is None:
            continue
        name = _local(child.tag)
        if name == "KitClassID":
            kit_class.class_id = KitClassID.from_text(text)
        elif name == "StandardsList":
            kit_class.standards = text
        elif name == "KitClassLabel":
            kit_class.label = text
    return kit_class


def parse_xkt(text: Union[str, bytes]) -> XktCalKit:
    """Parse the contents of an XKT document."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise XktParseError(f"parse xml failed: {exc}") from exc

    kit = XktCalKit()
    is_calkit = _local(root.tag) == "CalKit"
    for section in root:
        name = _local(section.tag)
        if name in _META_FIELDS:
            if is_calkit and section.text is not None:
                setattr(kit, _META_FIELDS[name], section.text)
        elif name == "ConnectorList":
            kit.connectors.extend(_parse_connector(item) for item in section)
        elif name == "StandardList":
            kit.standards.extend(_parse_standard(item) for item in section)
        elif name == "KitClasses":
            kit.kit_classes.append(_parse_kit_class(section))
    return kit


def parse_xkt_file(path: Union[str, "PathLike[str]"]) -> XktCalKit:
    """Read and parse an XKT file."""
    with open(path, "rb") as handle:
        return parse_xkt(handle.read())