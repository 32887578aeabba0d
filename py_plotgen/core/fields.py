"""
Scalar height fields for the wave and terrain generators.

Both the rendered frame and the exported document evaluate heights through
these functions only, so the two can never disagree.
"""

from typing import Callable, Dict

import numpy as np

from ..config.parameters import TextWaveForm, WaveType
from .noise import PerlinNoise

# Weight of x in the wave phase; waves mostly travel along depth.
WAVE_X_COUPLING = 0.003
CROSS_WAVE_AMPLITUDE = 0.3
CROSS_WAVE_FREQUENCY = 0.01
CROSS_WAVE_SPEED = 0.5

# Offset applied to noise coordinates per seed unit so neighbouring seeds
# sample unrelated terrain.
TERRAIN_SEED_OFFSET = 100.7
TERRAIN_BASELINE = 0.25

# Radial frequency scale of the spiral field; the arms carry most of its
# variation.
SPIRAL_RADIAL_SCALE = 0.1
MIN_SIZE_FACTOR = 0.1


def sine_wave(t):
    return np.sin(t)


def triangle_wave(t):
    """Triangle wave in [-1, 1] by folding sine through arcsine."""
    return (2.0 / np.pi) * np.arcsin(np.sin(t))


def square_wave(t):
    """Sign of sine. Ties at sin(t) == 0 resolve to +1, so square_wave(0) == 1."""
    return np.where(np.sin(t) >= 0, 1.0, -1.0)


def sawtooth_wave(t):
    """Centered sawtooth in [-1, 1): rises linearly and passes 0 at t = 0."""
    return (np.mod(np.asarray(t) + np.pi, 2.0 * np.pi) - np.pi) / np.pi


WAVEFORMS: Dict[WaveType, Callable] = {
    WaveType.SINE: sine_wave,
    WaveType.TRIANGLE: triangle_wave,
    WaveType.SQUARE: square_wave,
    WaveType.SAWTOOTH: sawtooth_wave,
}


def waveform(wave_type: WaveType, t):
    """
    Evaluate one waveform.

    Args:
        wave_type: Waveform variant
        t: Phase as a scalar or numpy array

    Returns:
        Float for scalar input, array otherwise
    """
    result = WAVEFORMS[WaveType(wave_type)](t)
    if np.ndim(result) == 0:
        return float(result)
    return result


def cross_wave(x, time: float = 0.0):
    """Secondary wave that varies across the field only."""
    return CROSS_WAVE_AMPLITUDE * np.sin(np.asarray(x) * CROSS_WAVE_FREQUENCY + time * CROSS_WAVE_SPEED)


def wave_height(x, z, wave_type: WaveType, amplitude: float, frequency: float,
                phase: float = 0.0, time: float = 0.0):
    """
    Height of the wave field at world position (x, z).

    height = amplitude * (waveform(z * frequency + x * 0.003 + phase + time)
    + 0.3 * sin(x * 0.01 + time * 0.5))
    """
    x = np.asarray(x, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)
    base = waveform(wave_type, z * frequency + x * WAVE_X_COUPLING + phase + time)
    height = amplitude * (base + cross_wave(x, time))
    if np.ndim(height) == 0:
        return float(height)
    return height


def terrain_height(noise: PerlinNoise, x, z, seed: int, noise_scale: float,
                   height_scale: float):
    """
    Noise terrain height at world position (x, z).

    Args:
        noise: Seeded noise source, detail already configured
        x: World x (scalar or array)
        z: World z (scalar or array)
        seed: Generation seed, used to shift the sampling window
        noise_scale: Multiplier applied to shifted coordinates
        height_scale: Multiplier applied to the recentered noise value

    Returns:
        Height with the same shape as the inputs
    """
    offset = seed * TERRAIN_SEED_OFFSET
    nx = (np.asarray(x, dtype=np.float64) + offset) * noise_scale
    nz = (np.asarray(z, dtype=np.float64) + offset) * noise_scale
    value = noise.noise2d(nx, nz)
    height = (value - TERRAIN_BASELINE) * height_scale
    if np.ndim(height) == 0:
        return float(height)
    return height


def radial_field(x, y, frequency: float, phase: float, **_):
    return np.sin(np.hypot(x, y) * frequency + phase)


def spiral_field(x, y, frequency: float, phase: float, spiral_tightness: float = 5.0, **_):
    r = np.hypot(x, y)
    return np.sin(r * frequency * SPIRAL_RADIAL_SCALE + np.arctan2(y, x) * spiral_tightness + phase)


def vertical_field(x, y, frequency: float, phase: float, angle: float = 0.0, **_):
    """Bands of constant y at angle 0; the wave travels down the canvas."""
    return np.sin((x * np.sin(angle) + y * np.cos(angle)) * frequency + phase)


def horizontal_field(x, y, frequency: float, phase: float, angle: float = 0.0, **_):
    """Bands of constant x at angle 0; the wave travels across the canvas."""
    return np.sin((x * np.cos(angle) - y * np.sin(angle)) * frequency + phase)


TEXT_FIELDS: Dict[TextWaveForm, Callable] = {
    TextWaveForm.RADIAL: radial_field,
    TextWaveForm.SPIRAL: spiral_field,
    TextWaveForm.VERTICAL: vertical_field,
    TextWaveForm.HORIZONTAL: horizontal_field,
}


def text_wave(form: TextWaveForm, x, y, frequency: float, phase: float = 0.0,
              spiral_tightness: float = 5.0, angle: float = 0.0):
    """
    Wave value in [-1, 1] at offset (x, y) from the canvas center.

    Args:
        form: Field shape
        x: Offset right of center (scalar or array)
        y: Offset below center (scalar or array)
        frequency: Spatial frequency
        phase: Phase offset in radians
        spiral_tightness: Angular multiplier, spiral only
        angle: Band rotation in radians, vertical and horizontal only
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    value = TEXT_FIELDS[TextWaveForm(form)](x, y, frequency, phase,
                                             spiral_tightness=spiral_tightness, angle=angle)
    if np.ndim(value) == 0:
        return float(value)
    return value


def size_factor(wave, amplitude: float):
    """Font size multiplier, floored at 0.1."""
    factor = np.maximum(MIN_SIZE_FACTOR, 1.0 + np.asarray(wave) * amplitude)
    return float(factor) if np.ndim(factor) == 0 else factor


def opacity_factor(wave, amplitude: float):
    """
    Fill opacity in [0, 1].

    The wave is remapped to [0, 1] and scaled by amplitude, and the remainder
    is kept as a floor: amplitude 0 gives fully opaque glyphs everywhere.
    """
    level = (1.0 + np.asarray(wave)) / 2.0
    opacity = np.clip(level * amplitude + (1.0 - amplitude), 0.0, 1.0)
    return float(opacity) if np.ndim(opacity) == 0 else opacity


def frange(start: float, stop: float, step: float, inclusive: bool = False):
    """
    Accumulating float range.

    Values are produced by repeated addition rather than ``start + i * step``;
    sample positions carry the accumulated rounding of a stepped loop.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    values = []
    v = start
    while v < stop or (inclusive and v <= stop):
        values.append(v)
        v += step
    return values
