# favicon_map/quantize/neuquant.py
from __future__ import annotations

"""
NeuQuant palette model.

Kohonen self-organising map over RGBA samples (A. Dekker, 1994). Each sample
runs a contest between neurons: the neuron with the smallest distance minus
its bias wins and is pulled towards the sample together with its neighbours
along the network. Frequently winning neurons accumulate negative bias, which
spreads the network over the whole colour distribution. The learning rate and
neighbourhood radius decay over a fixed number of cycles.

The sample factor is fixed at 1: every pixel is visited once, in a prime
stride order so consecutive samples are spread over the image.
"""

from typing import Tuple

import numpy as np

from ..core_types import U8Palette
from ..errors import InvalidParameterError

CHANNELS = 4

# Learning constants
NCYCLES_MIN = 100  # decay cycles for small networks
RADIUS_BIAS_SHIFT = 6
RADIUS_DEC = 30  # radius shrinks by 1/30 each cycle
ALPHA_BIAS_SHIFT = 10
INIT_ALPHA = 1 << ALPHA_BIAS_SHIFT

GAMMA = 1024.0
BETA = 1.0 / 1024.0
BETA_GAMMA = BETA * GAMMA

# Four primes near 500; assumes no image length is a multiple of all of them.
PRIMES: Tuple[int, ...] = (499, 491, 487, 503)


class NeuQuant:
    """
    Learn a palette of `colours` entries from RGBA pixels.

    Args:
      pixels  : uint8 [N,4] RGBA samples (N > 0)
      colours : palette size, >= 1
      sample_factor : 1 visits every pixel; larger values sub-sample
    """

    def __init__(self, pixels: np.ndarray, colours: int, sample_factor: int = 1):
        if colours < 1:
            raise InvalidParameterError(f"palette size must be >= 1, got {colours}")
        if sample_factor < 1:
            raise InvalidParameterError(
                f"sample_factor must be >= 1, got {sample_factor}"
            )
        samples = np.asarray(pixels, dtype=np.uint8).reshape(-1, CHANNELS)
        if samples.shape[0] == 0:
            raise InvalidParameterError("cannot learn a palette from zero pixels")

        self.netsize = int(colours)
        self.sample_factor = int(sample_factor)

        # Grey ramp start, fully opaque.
        ramp = np.arange(self.netsize, dtype=np.float64) * 256.0 / self.netsize
        self.network = np.empty((self.netsize, CHANNELS), dtype=np.float64)
        self.network[:, 0] = ramp
        self.network[:, 1] = ramp
        self.network[:, 2] = ramp
        self.network[:, 3] = 255.0
        self.freq = np.full((self.netsize,), 1.0 / self.netsize, dtype=np.float64)
        self.bias = np.zeros((self.netsize,), dtype=np.float64)

        self._learn(samples.astype(np.float64))
        self.colour_map = np.clip(np.rint(self.network), 0, 255).astype(np.uint8)

    # Learning

    def _contest(self, sample: np.ndarray) -> int:
        """
        Find the closest neuron (updates freq/bias) and return the best
        biased neuron.
        """
        dist = np.abs(self.network - sample).sum(axis=1)
        best = int(np.argmin(dist))
        best_biased = int(np.argmin(dist - self.bias))

        self.freq -= BETA * self.freq
        self.bias += BETA_GAMMA * self.freq
        self.freq[best] += BETA
        self.bias[best] -= BETA_GAMMA
        return best_biased

    def _alter_single(self, alpha: float, idx: int, sample: np.ndarray) -> None:
        self.network[idx] -= alpha * (self.network[idx] - sample)

    def _alter_neighbours(
        self, alpha: float, rad: int, idx: int, sample: np.ndarray
    ) -> None:
        """Pull neighbours within rad towards sample; weight is 1 - (q/rad)^2."""
        lo = max(idx - rad, -1)
        hi = min(idx + rad, self.netsize)
        rad_sq = float(rad * rad)
        steps = np.arange(rad, dtype=np.float64)
        weights = alpha * (rad_sq - steps * steps) / rad_sq

        up = idx + 1 + np.arange(rad)
        keep_up = up < hi
        down = idx - 1 - np.arange(rad)
        keep_down = down > lo

        for rows, w in (
            (up[keep_up], weights[keep_up]),
            (down[keep_down], weights[keep_down]),
        ):
            if rows.size:
                self.network[rows] -= w[:, None] * (self.network[rows] - sample)

    def _learn(self, samples: np.ndarray) -> None:
        length = samples.shape[0]
        sample_count = length // self.sample_factor
        init_radius = self.netsize >> 3
        bias_radius = init_radius * (1 << RADIUS_BIAS_SHIFT)
        alpha_dec = 30 + (self.sample_factor - 1) // 3
        n_cycles = max(NCYCLES_MIN, self.netsize >> 1)
        delta = max(1, sample_count // n_cycles)
        alpha = INIT_ALPHA

        rad = bias_radius >> RADIUS_BIAS_SHIFT
        if rad <= 1:
            rad = 0

        step = next((p for p in PRIMES if length % p != 0), PRIMES[-1])
        pos = 0
        for i in range(1, sample_count + 1):
            sample = samples[pos]
            winner = self._contest(sample)
            rate = alpha / float(INIT_ALPHA)
            self._alter_single(rate, winner, sample)
            if rad > 0:
                self._alter_neighbours(rate, rad, winner, sample)

            pos = (pos + step) % length

            if i % delta == 0:
                alpha -= alpha // alpha_dec
                bias_radius -= bias_radius // RADIUS_DEC
                rad = bias_radius >> RADIUS_BIAS_SHIFT
                if rad <= 1:
                    rad = 0

    # Palette model interface

    @property
    def palette_rgb(self) -> U8Palette:
        """uint8 [P,3] learned palette (alpha dropped)."""
        return np.ascontiguousarray(self.colour_map[:, :3])

    def index_of(self, pixel: np.ndarray) -> int:
        """Palette index closest to one RGBA pixel."""
        return int(self.nearest_indices(np.asarray(pixel).reshape(1, CHANNELS))[0])

    def nearest_indices(self, pixels: np.ndarray, chunk: int = 65536) -> np.ndarray:
        """Closest palette index (L1 over RGBA) for each row of uint8 [N,4]."""
        flat = np.asarray(pixels).reshape(-1, CHANNELS).astype(np.int32, copy=False)
        net = self.colour_map.astype(np.int32)
        out = np.empty((flat.shape[0],), dtype=np.int32)
        for start in range(0, flat.shape[0], chunk):
            block = flat[start : start + chunk]
            dist = np.abs(net[None, :, :] - block[:, None, :]).sum(axis=2)
            out[start : start + chunk] = np.argmin(dist, axis=1)
        return out


__all__ = ["NeuQuant"]
