# vnakit

Helpers for working with data from an HP 8753 vector network analyzer.
The package uses only the standard library.

## What is in it

- `vnakit.xkt`: reads XKT calibration-kit XML documents into dataclasses
  (`XktCalKit`, `Connector`, `Standard`, `KitClass`, `Offset`) with
  `parse_xkt(text)` and `parse_xkt_file(path)`. Malformed XML raises
  `XktParseError` (a `ValueError`).
- `vnakit.calkit`: turns a parsed kit into what the analyzer can be
  programmed with: up to eight numbered `CalibrationStandard`s and a
  `CalibrationClass` for each `CalibrationClassID`
  (`build_calibration_kit(xkt)`, `load_calibration_kit(path)`). A response
  class and a response-plus-isolation class are put together from the
  S11A, S11B and forward-transmission classes. `HP8753CalibrationKit.valid`
  is cleared when the kit holds something the analyzer cannot take, such as
  a standard number outside 1-8 or a complex arbitrary impedance.
- `vnakit.hpgl`: `HPGLCompiler` compiles the HPGL screen plot sent by the
  analyzer into drawing elements (`Line`, `Label`, `TextSize`, `PenSelect`,
  `LineTypeSelect`). `split_hpgl(data)` splits a raw stream into commands,
  `scale_point(point, area_width, area_height)` maps plotter coordinates onto
  a drawing area, and `HoldState` says which channels are in sweep hold, so
  that a scan arrow is drawn in place of `Hld` for a channel that is not held.
- `vnakit.smith`: `smith_reading(gamma, z0)` gives impedance, admittance,
  VSWR and return loss of a reflection coefficient; `reactive_component`
  gives the equivalent capacitance or inductance at a frequency;
  `circle_intersection_angles` and `search_stimulus_in_segment` are geometry
  and lookup helpers.
- `vnakit.polar`: `polar_reading(gamma)` and the magnitude rings of a polar
  graticule (`polar_ring_radii`, `polar_ring_labels`).
- `vnakit.cartesian`: y-axis tick values (`cartesian_tick_values`) and
  vertical grid line positions for linear and logarithmic sweeps
  (`linear_grid_positions`, `log_grid_positions`).
- `vnakit.chart`: `sweep_value_at` (stimulus at a fraction of the sweep),
  `interpolate_trace` (linear or spline), and the resistance and reactance
  circles of a Smith chart with their legends (`resistance_circles`,
  `reactance_circles`, `resistance_label`, `reactance_label`).
- `vnakit.spline`: Bezier control points and segments through trace points,
  `spline_interpolate`, `bezier_interpolate`, `hsv_to_rgb`, and
  `format_with_spaces` (six decimals, digits grouped in threes).
- `vnakit.profiles`: selecting and cloning named `Profile`s within a project;
  `select_profile` raises `ProfileNotFoundError` when the name is unknown.

## Installation

```
pip install vnakit
```

## Examples

Load a calibration kit and list the classes it defines:

```python
from vnakit.calkit import load_calibration_kit

kit = load_calibration_kit("85033D.xkt")
print(kit.label, "valid" if kit.valid else "has unsupported parts")
for class_id, cal_class in kit.specified_classes().items():
    print(class_id.name, cal_class.label, cal_class.standards)
```

Compile an HPGL screen plot:

```python
from vnakit.hpgl import HPGLCompiler, HoldState, split_hpgl

compiler = HPGLCompiler(HoldState(dual_channel=True))
finished = compiler.feed_all(split_hpgl(raw_hpgl_text))
for element in compiler.elements:
    print(element)
```

Read a point on a Smith chart:

```python
from vnakit.smith import smith_reading, reactive_component

reading = smith_reading(complex(0.2, 0.1), 50.0)
print(reading.resistance, reading.reactance, reading.vswr, reading.return_loss)
value, unit = reactive_component(reading, 100e6)
```

Interpolate a trace with a Bezier spline and format a frequency:

```python
from vnakit.chart import interpolate_trace
from vnakit.spline import format_with_spaces

point = interpolate_trace(trace_points, 12.5, spline=True)
print(format_with_spaces(1234.5678, "MHz"))   # 1 234.567 800 MHz
```

## What it does not do

The package does not talk to an analyzer: there is no GPIB, USB or serial
communication. It does not render anything either: it computes elements,
positions, labels and read-outs, and leaves drawing, printing and PDF or PNG
output to the caller. It has no user interface, no command-line tool and no
storage for profiles beyond the objects you hold.

## Running the tests

```
pip install -e ".[test]"
pytest
```