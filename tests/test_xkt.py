import pytest

from vnakit.xkt import (
    Connector,
    ConnectorType,
    KitClassID,
    StandardType,
    XktParseError,
    ascii_to_float,
    ascii_to_int,
    parse_xkt,
    parse_xkt_file,
)

SAMPLE = """<?xml version="1.0" encoding="utf-8"?>
<CalKit>
  <CalKitLabel>85033D</CalKitLabel>
  <CalKitVersion>1.0</CalKitVersion>
  <CalKitDescription>3.5 mm kit</CalKitDescription>
  <ConnectorList>
    <Coaxial>
      <Family> APC 3.5 </Family>
      <Gender>male</Gender>
      <MaximumFrequencyHz>6000000000</MaximumFrequencyHz>
      <MinimumFrequencyHz>0</MinimumFrequencyHz>
      <SystemZ0>50</SystemZ0>
    </Coaxial>
    <Waveguide>
      <Family>WR90</Family>
      <Gender>none</Gender>
      <CutoffFrequencyHz>6557</CutoffFrequencyHz>
      <HeightWidthRatio>0.5</HeightWidthRatio>
    </Waveguide>
    <Mystery><Family>ignored</Family></Mystery>
  </ConnectorList>
  <StandardList>
    <OpenStandard>
      <Label>OPEN</Label>
      <Description>male open</Description>
      <PortConnectorIDs>APC 3.5 male</PortConnectorIDs>
      <StandardNumber>1</StandardNumber>
      <C0>2.5e-15</C0>
      <C1>-1e-27</C1>
      <Offset>
        <OffsetDelay>1.2e-11</OffsetDelay>
        <OffsetLoss>7e8</OffsetLoss>
        <OffsetZ0>50</OffsetZ0>
      </Offset>
    </OpenStandard>
    <ArbitraryImpedanceStandard>
      <Label>ARB</Label>
      <PortConnectorIDs><string>APC 3.5 male</string><string>WR90 none</string></PortConnectorIDs>
      <StandardNumber>4</StandardNumber>
      <TerminationImpedance><Real>75</Real><Imag>3</Imag></TerminationImpedance>
    </ArbitraryImpedanceStandard>
    <BogusStandard><Label>nope</Label></BogusStandard>
  </StandardList>
  <KitClasses>
    <KitClassID>SA</KitClassID>
    <StandardsList>1</StandardsList>
    <KitClassLabel>OPEN</KitClassLabel>
  </KitClasses>
  <KitClasses>
    <KitClassID>NOT_A_CLASS</KitClassID>
  </KitClasses>
</CalKit>
"""


@pytest.fixture
def kit():
    return parse_xkt(SAMPLE)


def test_metadata(kit):
    assert kit.label == "85033D"
    assert kit.version == "1.0"
    assert kit.description == "3.5 mm kit"
    assert kit.trl_ref_plane is None


def test_connectors(kit):
    assert [c.type for c in kit.connectors] == [
        ConnectorType.COAXIAL,
        ConnectorType.WAVEGUIDE,
        ConnectorType.UNKNOWN,
    ]
    coax = kit.connectors[0]
    assert coax.max_freq_hz == 6000000000
    assert coax.system_z0 == 50.0
    assert coax.descriptor() == "APC 3.5 male"
    wg = kit.connectors[1]
    assert wg.cutoff_freq_hz == 6557
    assert wg.height_width_ratio == 0.5
    assert kit.connectors[2].family is None


def test_descriptor_handles_missing_parts():
    assert Connector(family="N", gender=None).descriptor() == "N "


def test_open_standard(kit):
    std = kit.standards[0]
    assert std.type is StandardType.OPEN
    assert std.label == "OPEN"
    assert std.description == "male open"
    assert std.number == 1
    assert std.c[:2] == [2.5e-15, -1e-27]
    assert std.port_connector_ids == ["APC 3.5 male"]
    assert std.offset.delay == 1.2e-11
    assert std.offset.loss == 7e8
    assert std.offset.z0 == 50.0


def test_arbitrary_standard(kit):
    std = kit.standards[1]
    assert std.type is StandardType.ARBITRARY_IMPEDANCE_LOAD
    assert std.termination_impedance == complex(75, 3)
    assert std.port_connector_ids == ["APC 3.5 male", "WR90 none"]
    assert std.number == 4


def test_unknown_standard_kept_but_empty(kit):
    std = kit.standards[2]
    assert std.type is StandardType.UNKNOWN
    assert std.label is None


def test_kit_classes(kit):
    assert [k.class_id for k in kit.kit_classes] == [KitClassID.SA, KitClassID.UNKNOWN]
    assert kit.kit_classes[0].standards == "1"
    assert kit.kit_classes[0].label == "OPEN"


def test_non_calkit_root_skips_metadata():
    kit = parse_xkt("<Other><CalKitLabel>x</CalKitLabel><KitClasses><KitClassID>SB</KitClassID></KitClasses></Other>")
    assert kit.label is None
    assert kit.kit_classes[0].class_id is KitClassID.SB


def test_malformed_raises():
    with pytest.raises(XktParseError):
        parse_xkt("<CalKit><CalKitLabel>oops</CalKit>")


def test_parse_file_matches_text(tmp_path):
    path = tmp_path / "kit.xkt"
    path.write_text(SAMPLE, encoding="utf-8")
    assert parse_xkt_file(path) == parse_xkt(SAMPLE)


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        parse_xkt_file(tmp_path / "absent.xkt")


@pytest.mark.parametrize(
    "text, expected",
    [("42", 42), ("  -7xyz", -7), ("abc", 0), ("", 0), ("+15", 15)],
)
def test_ascii_to_int(text, expected):
    assert ascii_to_int(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [("2.5", 2.5), (" 1e-15 ", 1e-15), ("3e", 3.0), (".5", 0.5), ("junk", 0.0)],
)
def test_ascii_to_float(text, expected):
    assert ascii_to_float(text) == expected