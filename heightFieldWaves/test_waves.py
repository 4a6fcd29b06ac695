# -- WaveSimulation Tests -- #

'''
Host-facing contract of WaveSimulation: counts, per-vertex output,
update semantics and the four-by-four reference scenario.
'''

import numpy as np
import pytest

from heightFieldWaves import WaveSimulation, WaveConfig, InvalidConfigError, OutOfRangeError
from heightFieldWaves.solver.normals import NormalEstimator


def _simulation(**overrides) -> WaveSimulation:
    params = dict(rows=12, columns=10, spacing=1.0, timeStep=0.03, waveSpeed=4.0, damping=0.2)
    params.update(overrides)
    return WaveSimulation(WaveConfig(**params))


@pytest.mark.parametrize('rows, columns', [(4, 4), (12, 10), (33, 17)])
def testCountsAreConsistent(rows, columns):
    sim = _simulation(rows=rows, columns=columns)
    sim.disturb(1, 1, 0.5)
    sim.update(0.1)

    assert sim.vertexCount() == sim.rowCount() * sim.columnCount()
    assert sim.triangleCount() == 2 * (sim.rowCount() - 1) * (sim.columnCount() - 1)
    assert sim.triangleIndices().shape == (sim.triangleCount(), 3)


def testWidthAndDepth():
    sim = _simulation(rows=12, columns=10, spacing=0.5)

    assert sim.width() == pytest.approx(5.0)
    assert sim.depth() == pytest.approx(6.0)


def testInvalidConfigRaisesOnConstruction():
    with pytest.raises(InvalidConfigError):
        _simulation(damping=2.5)


def testReferenceScenario():
    sim = WaveSimulation(WaveConfig(
        rows=4, columns=4, spacing=1.0, timeStep=0.03, waveSpeed=1.0, damping=0.0,
    ))
    e = (1.0 * 0.03 / 1.0) ** 2

    sim.disturb(1, 1, 1.0)
    postDisturb = sim.heights.copy()
    state = sim.update(0.03)
    h = sim.heights

    assert state.step == 1
    assert state.time == pytest.approx(0.03)

    # prev = 0, so next = k2 * curr + k3 * neighbours
    assert h[1, 1] == pytest.approx(2.0 - 2.0 * e)
    assert h[1, 1] != postDisturb[1, 1]

    assert h[2, 1] == pytest.approx(1.0 - e)
    assert h[1, 2] == pytest.approx(1.0 - e)
    assert h[2, 2] == pytest.approx(e)

    # Edge cells touched by the impulse keep their value, the rest stay 0
    assert h[0, 1] == 0.5
    assert h[1, 0] == 0.5
    for r, c in [(0, 0), (0, 2), (0, 3), (1, 3), (2, 0), (2, 3), (3, 0), (3, 1), (3, 2), (3, 3)]:
        assert h[r, c] == 0.0

    for r, c in [(0, 1), (2, 1), (1, 0), (1, 2)]:
        assert h[r, c] > 0.0


def testUpdateZeroLeavesHeightsUnchanged():
    sim = _simulation()
    sim.disturb(5, 5, 0.8)
    sim.update(0.07)
    before = sim.heights.copy()

    state = sim.update(0.0)

    np.testing.assert_array_equal(sim.heights, before)
    assert state.subSteps == 0


def testSimulatedTimeStaysOnStepLattice():
    sim = _simulation()
    sim.disturb(6, 5, 0.5)
    rng = np.random.default_rng(2)
    hostTime = 0.0

    for _ in range(60):
        delta = rng.uniform(0.005, 0.05)
        hostTime += delta
        state = sim.update(delta)

        assert state.time == pytest.approx(state.step * 0.03)
        assert -1e-12 <= hostTime - state.time < 0.03 + 1e-12


def testPositionsReportLatticeAndCurrentHeight():
    sim = _simulation(rows=6, columns=5, spacing=2.0)
    sim.disturb(2, 2, 1.0)
    sim.update(0.09)

    i = 2 * 5 + 2
    position = sim.position(i)

    assert position[0] == pytest.approx(0.0)
    assert position[2] == pytest.approx(5.0 - 2 * 2.0)
    assert position[1] == sim.heights[2, 2]
    np.testing.assert_array_equal(sim.positions()[i], position)


def testNormalsRefreshAfterDisturbAndUpdate():
    sim = _simulation()
    flat = sim.normal(3 * 10 + 4)
    np.testing.assert_array_equal(flat, [0.0, 1.0, 0.0])

    sim.disturb(3, 5, 1.0)
    tilted = sim.normal(3 * 10 + 4)
    assert tilted[0] < 0.0

    sim.update(0.2)
    expected = NormalEstimator(sim.grid).computeNormals()
    np.testing.assert_array_equal(sim.normals(), expected)
    for i in (0, 17, sim.vertexCount() - 1):
        np.testing.assert_array_equal(sim.normal(i), expected[i])


def testNormalCopiesDoNotLeakState():
    sim = _simulation()
    normal = sim.normal(0)
    normal[:] = 9.0

    np.testing.assert_array_equal(sim.normal(0), [0.0, 1.0, 0.0])


@pytest.mark.parametrize('index', [-1, 120, 500])
def testVertexAccessOutOfRange(index):
    sim = _simulation()
    with pytest.raises(OutOfRangeError):
        sim.position(index)
    with pytest.raises(OutOfRangeError):
        sim.normal(index)


def testDisturbOutOfRangeKeepsState():
    sim = _simulation()
    sim.disturb(4, 4, 0.5)
    before = sim.heights.tobytes()
    normalsBefore = sim.normals()

    with pytest.raises(OutOfRangeError):
        sim.disturb(0, 4, 1.0)

    assert sim.heights.tobytes() == before
    np.testing.assert_array_equal(sim.normals(), normalsBefore)


def testTextureCoordinatesSpanLattice():
    sim = _simulation(rows=4, columns=4, spacing=1.0)
    uv = sim.textureCoordinates()

    assert uv.shape == (16, 2)
    np.testing.assert_allclose(uv[0], [0.5 - 1.5 / 4.0, 0.5 - 1.5 / 4.0])
    np.testing.assert_allclose(uv[15], [0.5 + 1.5 / 4.0, 0.5 + 1.5 / 4.0])


def testTangentsShape():
    sim = _simulation()
    sim.disturb(5, 5, 1.0)

    tangents = sim.tangents()
    assert tangents.shape == (sim.vertexCount(), 3)
    np.testing.assert_allclose(np.linalg.norm(tangents, axis=1), 1.0)


def testCurrentStateDiagnostics():
    sim = _simulation(damping=0.0)
    assert sim.currentState.energy == 0.0
    assert sim.currentState.maxHeight == 0.0

    sim.disturb(5, 5, 0.4)
    state = sim.currentState

    assert state.maxHeight == pytest.approx(0.4)
    assert state.energy > 0.0


def testReset():
    sim = _simulation()
    sim.disturb(5, 5, 1.0)
    sim.update(0.5)

    sim.reset()

    assert sim.time == 0.0
    assert not np.any(sim.heights)
    np.testing.assert_array_equal(sim.normal(0), [0.0, 1.0, 0.0])


def testConfigEditsAfterConstructionDoNotLeak():
    config = WaveConfig(rows=8, columns=8, spacing=1.0, timeStep=0.03, waveSpeed=1.0, damping=0.2)
    sim = WaveSimulation(config)

    config.spacing = 2.0
    config.damping = 5.0
    sim.config.spacing = 3.0

    assert sim.width() == 8.0
    assert sim.depth() == 8.0
    assert sim.position(0)[0] == -3.5
    assert sim.grid.spacing == 1.0
    assert sim.grid.damping == 0.2
    assert sim.config.damping == 0.2


@pytest.mark.parametrize('index', [1.7, 2.0, True, False, '3', None])
def testNonIntegerVertexIndexRejected(index):
    sim = _simulation()
    with pytest.raises(OutOfRangeError):
        sim.position(index)
    with pytest.raises(OutOfRangeError):
        sim.normal(index)


def testNumpyIntegerVertexIndexAccepted():
    sim = _simulation()
    np.testing.assert_array_equal(sim.position(np.int64(13)), sim.position(13))
    np.testing.assert_array_equal(sim.normal(np.int32(13)), sim.normal(13))
