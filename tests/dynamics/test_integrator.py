# tests/dynamics/test_integrator.py
import math
import pytest
import numpy as np
from directbody import (
    ParticleSystem,
    ResourceExhaustionError,
    StepIntegrator,
    block_accelerations,
    center_of_mass,
    geometry_buffers,
    pairwise_accelerations,
    total_mass,
)
from tests import helpers

@pytest.mark.core
def test_single_particle_never_moves_under_gravity():
    system = ParticleSystem.from_arrays([3.0], [[1.0, 2.0, 3.0]], [[0.5, -0.5, 0.25]])
    integ = StepIntegrator()
    for k in range(1, 6):
        integ.step(system)
        # velocity unchanged, position drifts with it
        assert np.array_equal(system.vel, [[0.5, -0.5, 0.25]])
        assert system.pos[0] == pytest.approx([1.0 + 0.5 * k, 2.0 - 0.5 * k, 3.0 + 0.25 * k])

@pytest.mark.core
def test_single_particle_at_rest_is_completely_unchanged():
    system = ParticleSystem.from_arrays([3.0], [[1.0, 2.0, 3.0]])
    StepIntegrator().run(system, 10)
    assert np.array_equal(system.pos, [[1.0, 2.0, 3.0]])
    assert np.array_equal(system.vel, np.zeros((1, 3)))

@pytest.mark.core
def test_empty_system_steps_without_error():
    system = ParticleSystem.allocate(0)
    integ = StepIntegrator()
    integ.run(system, 3)
    assert integ.step_count == 3

@pytest.mark.core
def test_two_equal_bodies_fall_symmetrically():
    system = helpers.make_two_body(separation=2.0)
    StepIntegrator(G=0.001).step(system)
    # a = G * m / d^2 = 0.001 / 4
    assert system.vel[0] == pytest.approx([0.00025, 0.0, 0.0])
    assert system.vel[1] == pytest.approx([-0.00025, 0.0, 0.0])
    assert system.pos[0] == pytest.approx([-1.0 + 0.00025, 0.0, 0.0])
    assert system.pos[1] == pytest.approx([1.0 - 0.00025, 0.0, 0.0])

@pytest.mark.core
def test_two_body_center_of_mass_is_conserved():
    system = helpers.make_two_body(separation=10.0)
    M = total_mass(system)
    com0 = center_of_mass(system, M)
    integ = StepIntegrator()
    for _ in range(50):
        integ.step(system)
        assert np.allclose(center_of_mass(system, M), com0, atol=1e-12)
        assert system.pos[0, 0] == pytest.approx(-system.pos[1, 0])

@pytest.mark.core
def test_softening_floor_for_coincident_particles():
    system = ParticleSystem.from_arrays([1.0, 1.0], [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
    StepIntegrator().step(system)
    assert np.all(np.isfinite(system.vel))
    assert np.all(np.isfinite(system.pos))
    assert np.array_equal(system.vel, np.zeros((2, 3)))

@pytest.mark.core
def test_softening_floor_clamps_near_coincident_separation():
    system = ParticleSystem.from_arrays([1.0, 1.0], [[0.0, 0.0, 0.0], [1.0e-4, 0.0, 0.0]])
    StepIntegrator(G=0.001, softening_floor=0.01).step(system)
    # (G m / floor^2) * (dx / floor) = 10 * 0.01
    assert system.vel[0] == pytest.approx([0.1, 0.0, 0.0])
    assert system.vel[1] == pytest.approx([-0.1, 0.0, 0.0])

@pytest.mark.core
def test_geometry_buffers_apply_floor():
    pos = np.array([[0.0, 0.0, 0.0], [3.0, 4.0, 0.0], [0.001, 0.0, 0.0]])
    dr, d = geometry_buffers(pos[:1], pos, floor=0.01)
    assert dr.shape == (1, 3, 3)
    assert d[0] == pytest.approx([0.01, 5.0, 0.01])

@pytest.mark.core
def test_equilateral_triangle_contracts_toward_centroid():
    system = helpers.make_triangle()
    M = total_mass(system)
    com0 = center_of_mass(system, M)
    start = system.pos.copy()
    StepIntegrator(G=0.001).step(system)
    # side sqrt(3): two pulls of G/3 at 30 degrees from the centroid direction
    expected_shift = 0.001 / math.sqrt(3.0)
    moved = system.pos - start
    for i in range(3):
        assert moved[i] == pytest.approx(-expected_shift * start[i], abs=1e-15)
    assert np.linalg.norm(moved, axis=1) == pytest.approx([expected_shift] * 3)
    assert np.allclose(center_of_mass(system, M), com0, atol=1e-14)

@pytest.mark.core
def test_step_matches_scalar_loop_over_step_start_state():
    system = helpers.make_random_system(9, seed=21)
    for _ in range(3):
        expected_pos, expected_vel = helpers.reference_step(system.mass, system.pos, system.vel)
        StepIntegrator().step(system)
        assert np.allclose(system.vel, expected_vel, rtol=1e-12, atol=1e-14)
        assert np.allclose(system.pos, expected_pos, rtol=1e-12, atol=1e-12)

@pytest.mark.core
def test_step_leaves_masses_alone():
    system = helpers.make_random_system(12)
    masses = system.mass.copy()
    StepIntegrator().run(system, 4)
    assert np.array_equal(system.mass, masses)

@pytest.mark.core
def test_snapshot_buffer_is_reused_across_steps():
    system = helpers.make_random_system(8)
    integ = StepIntegrator()
    integ.step(system)
    snap = integ.snapshot
    scratch = list(integ.scratch)
    integ.step(system)
    assert integ.snapshot is snap
    assert all(a is b for a, b in zip(integ.scratch, scratch))
    assert integ.step_count == 2

@pytest.mark.core
def test_pairwise_accelerations_match_block_pieces():
    system = helpers.make_random_system(10, seed=2)
    full = pairwise_accelerations(system.pos, system.mass)
    top = block_accelerations(system.pos, system.mass, system.mass[:4], 0, 4)
    bottom = block_accelerations(system.pos, system.mass, system.mass[4:], 4, 10)
    assert np.allclose(np.vstack([top, bottom]), full, rtol=1e-13, atol=1e-16)
    assert block_accelerations(system.pos, system.mass, system.mass[:0], 3, 3).shape == (0, 3)

@pytest.mark.consistency
@pytest.mark.parametrize("n_jobs,block_size", [(2, 3), (4, 1), (-1, 5)])
def test_parallel_blocks_agree_with_serial_step(n_jobs, block_size):
    serial = helpers.make_random_system(23, seed=4)
    parallel = serial.copy()
    StepIntegrator(n_jobs=1, block_size=256).run(serial, 3)
    StepIntegrator(n_jobs=n_jobs, block_size=block_size).run(parallel, 3)
    assert np.allclose(parallel.vel, serial.vel, rtol=1e-12, atol=1e-15)
    assert np.allclose(parallel.pos, serial.pos, rtol=1e-12, atol=1e-12)

@pytest.mark.consistency
def test_repeated_runs_are_bit_identical():
    a = helpers.make_random_system(30, seed=9)
    b = helpers.make_random_system(30, seed=9)
    StepIntegrator(block_size=7).run(a, 5)
    StepIntegrator(block_size=7).run(b, 5)
    assert np.array_equal(a.pos, b.pos)
    assert np.array_equal(a.vel, b.vel)

@pytest.mark.core
def test_geometry_buffers_write_into_given_arrays():
    pos = np.array([[0.0, 0.0, 0.0], [3.0, 4.0, 0.0]])
    dr_out = np.full((1, 2, 3), np.nan)
    d_out = np.full((1, 2), np.nan)
    dr, d = geometry_buffers(pos[1:], pos, floor=0.01, out=(dr_out, d_out))
    assert dr is dr_out
    assert d is d_out
    assert d_out[0] == pytest.approx([5.0, 0.01])
    assert dr_out[0, 0] == pytest.approx([-3.0, -4.0, 0.0])

@pytest.mark.core
@pytest.mark.parametrize("n_jobs,block_size,n,expected_slots", [(1, 4, 10, 1), (2, 4, 10, 2), (8, 4, 10, 3), (2, 4, 0, 0)])
def test_bind_gives_each_worker_slot_its_own_scratch(n_jobs, block_size, n, expected_slots):
    system = ParticleSystem.allocate(n)
    integ = StepIntegrator(n_jobs=n_jobs, block_size=block_size)
    integ.bind(system)
    assert len(integ.scratch) == expected_slots
    for scratch in integ.scratch:
        assert scratch.dr.shape == (min(block_size, n), n, 3)
    assert len({id(s) for s in integ.scratch}) == expected_slots

@pytest.mark.core
def test_bind_reports_scratch_exhaustion(monkeypatch):
    def no_memory(self, rows, n):
        raise MemoryError
    monkeypatch.setattr("directbody.geometry_cache.BlockScratch.__init__", no_memory)
    with pytest.raises(ResourceExhaustionError) as excinfo:
        StepIntegrator().bind(helpers.make_random_system(5))
    assert excinfo.value.resource == "step scratch"

@pytest.mark.core
def test_memory_error_inside_step_is_resource_exhaustion(monkeypatch):
    system = helpers.make_random_system(6)
    integ = StepIntegrator(n_jobs=2, block_size=2)
    integ.bind(system)
    def no_memory(*args, **kwargs):
        raise MemoryError
    monkeypatch.setattr("directbody.forces.geometry_buffers", no_memory)
    with pytest.raises(ResourceExhaustionError) as excinfo:
        integ.step(system)
    assert excinfo.value.resource == "step scratch"
    assert excinfo.value.n == 6
    assert integ.step_count == 0
