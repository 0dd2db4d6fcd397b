"""
This initialization file is the entry point for the directbody package, a direct
all-pairs gravitational N-body simulator with unit timesteps.

It re-exports the data model (Body, BodyView, ParticleSystem, Snapshot), the initial
condition generator, the force kernels, the StepIntegrator, the diagnostics, the console
reporter, the SimulationDriver with its RunState and SimulationResult, the configuration
and validation helpers, and the exception taxonomy, so callers can import any of them
from the package root.
"""

from .errors import (
	EXIT_OK,
	EXIT_INVALID,
	EXIT_ABORT,
	SimulationError,
	ResourceExhaustionError,
	InitializationError,
	InvalidInputError,
)
from .sim_config import SimConfig
from .simulation_validator import SimulationValidator

from .body import Body
from .body_view import BodyView
from .particle_system import ParticleSystem, Snapshot
from .initial_condition_generator import (
	InitialConditionGenerator,
	GeneratorConfig,
)

from .geometry_cache import geometry_buffers
from .forces import block_accelerations, pairwise_accelerations
from .integrator import StepIntegrator

from .diagnostics import Diagnostics, total_mass, center_of_mass
from .reporters import ConsoleReporter
from .simulation import SimulationDriver, SimulationResult, RunState


__all__ = [
	"EXIT_OK",
	"EXIT_INVALID",
	"EXIT_ABORT",
	"SimulationError",
	"ResourceExhaustionError",
	"InitializationError",
	"InvalidInputError",
	"SimConfig",
	"SimulationValidator",
	"Body",
	"BodyView",
	"ParticleSystem",
	"Snapshot",
	"InitialConditionGenerator",
	"GeneratorConfig",
	"geometry_buffers",
	"block_accelerations",
	"pairwise_accelerations",
	"StepIntegrator",
	"Diagnostics",
	"total_mass",
	"center_of_mass",
	"ConsoleReporter",
	"SimulationDriver",
	"SimulationResult",
	"RunState",
]
