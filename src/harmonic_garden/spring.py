"""
Damped harmonic springs and ballistic projectiles.

A spring is precomputed for a fixed timestep into four coefficients
mapping (displacement, velocity) to their values one step later, so
each update is a pair of multiply-adds regardless of regime.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from harmonic_garden.base import Vector

EPSILON = 1e-4


@dataclass(frozen=True)
class Spring:
    """
    Exact one-step solution of a damped harmonic oscillator.

    ``frequency`` is the angular frequency (stiffness) and ``damping``
    the dimensionless damping ratio: below 1 oscillates, 1 is critical,
    above 1 creeps in without overshoot.
    """
    pos_pos: float = 1.0
    pos_vel: float = 0.0
    vel_pos: float = 0.0
    vel_vel: float = 1.0

    @classmethod
    def tuned(cls, dt: float, frequency: float, damping: float) -> "Spring":
        omega = max(0.0, frequency)
        zeta = max(0.0, damping)

        if omega < EPSILON:
            return cls()

        if zeta > 1.0 + EPSILON:
            # Over-damped: two real decaying modes z1 < z2 < 0.
            za = -omega * zeta
            zb = omega * math.sqrt(zeta * zeta - 1.0)
            z1 = za - zb
            z2 = za + zb
            e1 = math.exp(z1 * dt)
            e2 = math.exp(z2 * dt)
            inv = 1.0 / (2.0 * zb)
            return cls(
                pos_pos=(z2 * e1 - z1 * e2) * inv,
                pos_vel=(e2 - e1) * inv,
                vel_pos=z1 * z2 * (e1 - e2) * inv,
                vel_vel=(z2 * e2 - z1 * e1) * inv,
            )

        if zeta < 1.0 - EPSILON:
            # Under-damped: decaying oscillation at alpha.
            omega_zeta = omega * zeta
            alpha = omega * math.sqrt(1.0 - zeta * zeta)
            exp_term = math.exp(-omega_zeta * dt)
            exp_cos = exp_term * math.cos(alpha * dt)
            exp_sin = exp_term * math.sin(alpha * dt)
            damped_sin = exp_sin * omega_zeta / alpha
            return cls(
                pos_pos=exp_cos + damped_sin,
                pos_vel=exp_sin / alpha,
                vel_pos=-exp_sin * alpha - omega_zeta * damped_sin,
                vel_vel=exp_cos - damped_sin,
            )

        # Critically damped.
        exp_term = math.exp(-omega * dt)
        time_exp = dt * exp_term
        time_exp_freq = time_exp * omega
        return cls(
            pos_pos=time_exp_freq + exp_term,
            pos_vel=time_exp,
            vel_pos=-omega * time_exp_freq,
            vel_vel=exp_term - time_exp_freq,
        )

    def update(self, pos: float, vel: float, target: float) -> Tuple[float, float]:
        """Advance one step toward ``target``; returns (position, velocity)."""
        offset = pos - target
        return (
            offset * self.pos_pos + vel * self.pos_vel + target,
            offset * self.vel_pos + vel * self.vel_vel,
        )


class Projectile:
    """Constant-acceleration motion integrated at a fixed timestep."""

    def __init__(self, dt: float, position: Vector, velocity: Vector, acceleration: Vector):
        self.dt = dt
        self.position = position
        self.velocity = velocity
        self.acceleration = acceleration

    def update(self) -> Vector:
        """Move with the current velocity, then accelerate."""
        dt = self.dt
        self.position = Vector(
            self.position.x + self.velocity.x * dt,
            self.position.y + self.velocity.y * dt,
        )
        self.velocity = Vector(
            self.velocity.x + self.acceleration.x * dt,
            self.velocity.y + self.acceleration.y * dt,
        )
        return self.position
