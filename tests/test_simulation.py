"""
Tests for the Gray-Scott grid simulator.
"""

import pytest
import mlx.core as mx

from grayscott.config import Config, FLOAT32_MAX
from grayscott.simulation import Simulation
from grayscott.state import Cell, SeedRegion, create_uniform_state, default_seed_region


def border_values(sim: Simulation) -> list[Cell]:
    """All border cells of the current buffer in a fixed order."""
    H, W = sim.shape
    state = sim.state
    coords = (
        [(x, 0) for x in range(W)]
        + [(x, H - 1) for x in range(W)]
        + [(0, y) for y in range(1, H - 1)]
        + [(W - 1, y) for y in range(1, H - 1)]
    )
    return [state.cell(x, y) for x, y in coords]


class TestConfigure:
    """Tests for (re)configuration."""

    def test_default_seed(self, default_config):
        """Resting field everywhere except the centered seed block."""
        sim = Simulation(default_config)
        region = default_seed_region(default_config.width, default_config.height)
        snap = sim.snapshot()

        for y in range(default_config.height):
            for x in range(default_config.width):
                inside = region.x_min <= x < region.x_max and region.y_min <= y < region.y_max
                expected = Cell(0.0, 1.0) if inside else Cell(1.0, 0.0)
                assert snap.cell(x, y) == expected

    def test_explicit_seed_region(self):
        """A caller-provided rectangle replaces the default block."""
        sim = Simulation(Config(width=10, height=10), seed_region=SeedRegion(1, 3, 6, 9))
        snap = sim.snapshot()

        assert snap.cell(2, 8) == Cell(0.0, 1.0)
        assert snap.cell(5, 5) == Cell(1.0, 0.0)
        assert float(mx.sum(snap.B)) == 6.0

    def test_no_seed(self):
        """seed_region=None leaves the field at rest."""
        sim = Simulation(Config(width=10, height=10), seed_region=None)

        assert mx.all(sim.state.A == 1.0)
        assert mx.all(sim.state.B == 0.0)

    def test_default_config(self):
        """Simulation() uses Config()."""
        sim = Simulation()
        assert sim.shape == (100, 100)
        assert sim.snapshot().cell(50, 50) == Cell(0.0, 1.0)

    def test_rejects_non_config(self):
        """Raw parameters must go through Config."""
        with pytest.raises(ValueError, match="Config"):
            Simulation({"width": 10, "height": 10})

    def test_rejects_bad_seed_region(self):
        """A seed region outside the grid fails configuration."""
        with pytest.raises(ValueError, match="seed"):
            Simulation(Config(width=10, height=10), seed_region=SeedRegion(8, 12, 0, 2))

    def test_idempotent(self, default_config):
        """Reconfiguring restores the initial state and counter."""
        sim = Simulation(default_config)
        initial = sim.snapshot()

        for _ in range(10):
            sim.step()
        sim.configure(default_config)

        assert sim.step_count == 0
        assert mx.array_equal(sim.state.A, initial.A)
        assert mx.array_equal(sim.state.B, initial.B)

    def test_reconfigure_resizes(self, simulation):
        """Configure rebuilds buffers at the new resolution."""
        simulation.step()
        simulation.configure(Config(width=12, height=7))

        assert simulation.shape == (7, 12)
        assert simulation.state.shape == (7, 12)
        assert simulation.step_count == 0

    def test_reset(self, simulation):
        """reset() reconfigures with the current config."""
        initial = simulation.snapshot()
        for _ in range(5):
            simulation.step()

        simulation.reset()

        assert simulation.step_count == 0
        assert mx.array_equal(simulation.state.B, initial.B)


class TestSeed:
    """Tests for explicit seeding."""

    def test_seed_sets_rectangle(self):
        """Cells inside the half-open rectangle become (0, 1)."""
        sim = Simulation(Config(width=10, height=10), seed_region=None)
        sim.seed(2, 4, 5, 8)
        snap = sim.snapshot()

        assert snap.cell(2, 5) == Cell(0.0, 1.0)
        assert snap.cell(3, 7) == Cell(0.0, 1.0)
        assert snap.cell(4, 7) == Cell(1.0, 0.0)
        assert snap.cell(3, 8) == Cell(1.0, 0.0)

    @pytest.mark.parametrize("rect", [
        (-1, 2, 0, 2),
        (0, 11, 0, 2),
        (0, 2, 9, 11),
        (5, 5, 0, 2),
        (0, 2, 6, 3),
    ])
    def test_seed_rejects_invalid_rectangles(self, rect):
        """Out-of-range or empty rectangles raise ValueError."""
        sim = Simulation(Config(width=10, height=10), seed_region=None)

        with pytest.raises(ValueError, match="seed"):
            sim.seed(*rect)

        assert mx.all(sim.state.B == 0.0)

    def test_seeded_border_stays_fixed_across_swaps(self):
        """Seeding a border region holds in both buffers."""
        sim = Simulation(Config(width=10, height=10), seed_region=None)
        sim.seed(0, 3, 0, 3)

        for _ in range(3):
            sim.step()
            assert sim.state.cell(0, 0) == Cell(0.0, 1.0)
            assert sim.state.cell(2, 0) == Cell(0.0, 1.0)
            assert sim.state.cell(0, 2) == Cell(0.0, 1.0)


class TestStep:
    """Tests for the reaction-diffusion step."""

    def test_step_count(self, simulation):
        """Each step increments the frame counter."""
        assert simulation.step_count == 0
        simulation.step()
        simulation.step()
        assert simulation.step_count == 2

    def test_uniform_rest_field_unchanged(self):
        """With b = 0 everywhere and a uniform, a step changes nothing."""
        sim = Simulation(Config(width=9, height=7), seed_region=None)

        sim.step()

        assert mx.array_equal(sim.state.A, mx.ones((7, 9)))
        assert mx.array_equal(sim.state.B, mx.zeros((7, 9)))

    def test_border_invariant(self):
        """Border cells never change, however many steps run."""
        sim = Simulation(Config(width=20, height=16))
        sim.seed(8, 12, 0, 4)  # Touches the top border
        before = border_values(sim)

        for _ in range(40):
            sim.step()

        assert border_values(sim) == before

    def test_values_clamped(self):
        """Concentrations stay in [0, 1] for extreme rates."""
        config = Config(width=12, height=12, D_A=50.0, D_B=50.0, feed=5.0, kill=5.0)
        sim = Simulation(config)

        for _ in range(5):
            sim.step()
            state = sim.state
            assert mx.all(state.A >= 0.0) and mx.all(state.A <= 1.0)
            assert mx.all(state.B >= 0.0) and mx.all(state.B <= 1.0)

    def test_values_clamped_near_float32_limit(self):
        """Rates close to the float32 maximum never produce NaN or leave [0, 1]."""
        config = Config(width=12, height=12, D_A=3e38, D_B=3e38, feed=1e38, kill=2e38)
        sim = Simulation(config)

        for _ in range(3):
            sim.step()
            state = sim.state
            assert not mx.any(mx.isnan(state.A)) and not mx.any(mx.isnan(state.B))
            assert mx.all(state.A >= 0.0) and mx.all(state.A <= 1.0)
            assert mx.all(state.B >= 0.0) and mx.all(state.B <= 1.0)

    def test_resting_cells_stay_finite_with_huge_diffusion(self):
        """Zero Laplacian times a huge diffusion rate stays zero."""
        sim = Simulation(Config(width=12, height=12, D_A=FLOAT32_MAX), seed_region=None)

        sim.step()

        assert mx.array_equal(sim.state.A, mx.ones((12, 12)))

    def test_deterministic(self, default_config):
        """Identical runs produce bit-identical grids."""
        sim1 = Simulation(default_config)
        sim2 = Simulation(default_config)

        for _ in range(30):
            sim1.step()
            sim2.step()

        assert mx.array_equal(sim1.state.A, sim2.state.A)
        assert mx.array_equal(sim1.state.B, sim2.state.B)

    def test_pattern_spreads(self, default_config):
        """The seed perturbs cells outside its original rectangle."""
        sim = Simulation(default_config)
        seeded = float(mx.sum((sim.state.B > 0).astype(mx.float32)))

        for _ in range(20):
            sim.step()

        assert float(mx.sum((sim.state.B > 0).astype(mx.float32))) > seeded

    def test_five_by_five_fully_seeded(self, small_config):
        """Every interior cell reacts to (0.055, 0.883); borders keep the seed."""
        sim = Simulation(small_config, seed_region=SeedRegion(0, 5, 0, 5))

        sim.step()

        center = sim.state.cell(2, 2)
        assert center.a == pytest.approx(0.055, abs=1e-6)
        assert center.b == pytest.approx(0.883, abs=1e-6)
        for y in range(1, 4):
            for x in range(1, 4):
                assert sim.state.cell(x, y).a == pytest.approx(0.055, abs=1e-6)
        assert all(cell == Cell(0.0, 1.0) for cell in border_values(sim))

    def test_five_by_five_center_seed(self, small_config):
        """Single seeded cell on a resting field; borders stay (1, 0)."""
        sim = Simulation(small_config, seed_region=SeedRegion(2, 3, 2, 3))

        sim.step()

        assert sim.state.cell(2, 2).a == 1.0
        assert sim.state.cell(2, 2).b == pytest.approx(0.583, abs=1e-6)
        assert sim.state.cell(2, 1).a == pytest.approx(0.8, abs=1e-6)
        assert sim.state.cell(1, 1).b == pytest.approx(0.015, abs=1e-6)
        assert all(cell == Cell(1.0, 0.0) for cell in border_values(sim))

    def test_second_step_reads_first_result(self, small_config):
        """After a swap the next step builds on the newly written buffer."""
        sim = Simulation(small_config, seed_region=SeedRegion(0, 5, 0, 5))
        expected = create_uniform_state(5, 5, 0.0, 1.0)

        sim.step()
        sim.step()

        first_a, first_b = 0.055, 0.883
        center = sim.state.cell(2, 2)
        # Center's neighbors are all interior cells at (first_a, first_b)
        lap_a = (0.2 * 4 + 0.05 * 4 - 1.0) * first_a
        lap_b = (0.2 * 4 + 0.05 * 4 - 1.0) * first_b
        expected_a = first_a + 1.0 * lap_a - first_a * first_b ** 2 + 0.055 * (1 - first_a)
        expected_b = first_b + 0.3 * lap_b + first_a * first_b ** 2 - 0.117 * first_b
        assert center.a == pytest.approx(expected_a, abs=1e-5)
        assert center.b == pytest.approx(expected_b, abs=1e-5)
        assert sim.state.cell(0, 0) == expected.cell(0, 0)


class TestSnapshot:
    """Tests for snapshot()."""

    def test_snapshot_is_copy(self, simulation):
        """Mutating a snapshot does not touch the simulator."""
        snap = simulation.snapshot()
        snap.A[5, 5] = 0.5

        assert simulation.state.A[5, 5].item() == 1.0

    def test_snapshot_survives_steps(self, simulation):
        """A snapshot keeps the values it was taken with."""
        snap = simulation.snapshot()
        before = mx.array(snap.B)

        for _ in range(4):
            simulation.step()

        assert mx.array_equal(snap.B, before)
        assert not mx.array_equal(simulation.state.B, before)


class TestRun:
    """Tests for run()."""

    def test_runs_steps(self, simulation):
        """run() advances the requested number of steps."""
        simulation.run(7, show_progress=False)
        assert simulation.step_count == 7

    def test_callback_interval(self, simulation):
        """Callback fires every callback_interval steps."""
        seen = []

        simulation.run(
            10,
            callback=lambda s: seen.append(s.step_count),
            callback_interval=3,
            show_progress=False,
        )

        assert seen == [3, 6, 9]
