"""
This module defines the failure taxonomy for direct-summation runs together with the
process exit statuses the command line layer maps them to. ResourceExhaustionError marks
particle or snapshot storage that could not be obtained, InitializationError marks a
failed initial-condition sampler, and InvalidInputError marks parameters or states that
are rejected before any computation. Close encounters are not errors; the softening floor
absorbs them inside the force kernel.
"""

from __future__ import annotations


EXIT_OK = 0
EXIT_INVALID = 2
EXIT_ABORT = 99


class SimulationError(Exception):
	pass


class ResourceExhaustionError(SimulationError):
	def __init__(self, resource: str, n: int) -> None:
		self.resource = resource
		self.n = int(n)
		super().__init__(f"could not allocate {resource} for {self.n} particles")


class InitializationError(SimulationError):
	pass


class InvalidInputError(SimulationError, ValueError):
	pass


__all__ = [
	"EXIT_OK",
	"EXIT_INVALID",
	"EXIT_ABORT",
	"SimulationError",
	"ResourceExhaustionError",
	"InitializationError",
	"InvalidInputError",
]
