# acoustolev

Tools for working with 40 kHz ultrasonic phased arrays used for acoustic
levitation.

- `acoustolev.physics` – physical constants (`rho_p`, `rho_a`, `c_p`, `c_a`,
  `frequency`, `wavelength`, `wavenumber`, `omega`, `particle_radius`,
  `transducer_radius`), transducer layouts (`transducer_pos_top_bottom`,
  `transducer_pos_side_by_side`, `side_by_side_positions`) and a piston-model
  propagation of the complex field to any point (`amplitude_and_distance`,
  `propagate_field`, `propagate_field_on_grid`, `propagate_field_from_phases`).
- `acoustolev.gorkov` – the Gor'kov coefficients (`gorkov_k1`, `gorkov_k2`),
  the potential at a point (`gorkov_potential`), derivatives of the field and
  of the potential (`field_derivative`, `gorkov_derivative`) and the radiation
  force on a small particle (`acoustic_force`). Derivatives use a five-point
  central-difference stencil whose step defaults to a sixty-fourth of a
  wavelength.
- `acoustolev.gorkov_stiffness` – `gorkov_second_derivative`, `stiffness`
  (minus the second derivative of the potential along X, Y and Z),
  `force_derivative` and `force_gradients`.
- `acoustolev.visualize` – render the field amplitude across a plane as an RGB
  array (`render_plane`, `render_plane_grid`, `render_plane_from_phases`,
  `amplitude_to_rgb`). The result is a `PlaneRender` holding the image, the
  amplitudes and their mean, minimum and maximum; `summary()` formats the
  statistics.
- `acoustolev.board_config` – read and write the `board_<id>.pat` calibration
  files (`BoardConfig`, `parse_board_config`, `read_board_config`,
  `read_board_config_by_id`, `write_board_config`); malformed files raise
  `BoardConfigError`.
- `acoustolev.messages` – build the byte messages the boards understand:
  phase and amplitude discretisation (`discretize_phase`,
  `discretize_amplitude`, `discretize_message`), on/off messages
  (`transducers_on_message`, `transducers_off_message`) and the update-rate
  divider message (`divider_message`).
- `acoustolev.timing` – `Timeval` arithmetic (`now`, `timeval_from_millis`,
  `timeval_subtract`, `timeval_add`, `time_elapsed`, `time_elapsed_millis`),
  a wrapping microsecond counter (`micro_time`), busy waits (`micro_wait`)
  and `UpdatePeriodKeeper` for keeping a fixed update period.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example: force on a particle

```python
import numpy as np
from acoustolev.physics import side_by_side_positions
from acoustolev.gorkov import gorkov_potential, acoustic_force

positions = side_by_side_positions((32, 16), 0.0105)
field = np.ones(len(positions), dtype=complex)    # all transducers in phase

point = (0.0, 0.0, 0.1194)
print(gorkov_potential(point, field, positions))
print(acoustic_force(point, field, positions))
```

## Example: a field plot

```python
from acoustolev.visualize import render_plane_grid

render = render_plane_grid(
    (-0.08, 0.0, 0.0), (0.08, 0.0, 0.0), (-0.08, 0.0, 0.2388),
    (32, 48), [1] * 512, (32, 16),
)
print(render.image.shape)   # (48, 32, 3)
print(render.summary())
```

## Example: calibration file and message

```python
from acoustolev.board_config import BoardConfig, read_board_config_by_id, write_board_config
from acoustolev.messages import discretize_message, divider_message

config = BoardConfig(
    hardware_id="EXAMPLE-BOARD",
    num_discrete_levels=128,
    positions=[(0.0, 0.0, 0.0), (0.0105, 0.0, 0.0)],
    pin_mapping=[1, 0],
    phase_adjust=[0, 90],
    amplitude_adjust=[1.0, 1.0],
)
write_board_config(config, 7, ".")
config = read_board_config_by_id(7, ".")

message = discretize_message(
    [0.0, 3.14], [1.0, 0.5], config.phase_adjust, config.pin_mapping, 128
)
control = divider_message(4, 512, 2)
```

## What this package does not do

It builds the byte messages for the boards but does not send them: there is
no network or serial-port driver, no connection management and no command
line program. Plots are returned as arrays; nothing is shown on screen.