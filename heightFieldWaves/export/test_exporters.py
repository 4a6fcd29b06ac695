# -- Exporter Tests -- #

import json
import os

import numpy as np
import pytest

from heightFieldWaves import WaveSimulation, WaveConfig
from heightFieldWaves.export import FrameExporter, MeshExporter


def _runSimulation(frames=5) -> tuple[WaveSimulation, FrameExporter]:
    sim = WaveSimulation(WaveConfig(rows=8, columns=9, spacing=0.5, timeStep=0.02, waveSpeed=1.0, damping=0.1))
    exporter = FrameExporter(decimals=4)
    sim.disturb(4, 4, 0.5)
    exporter.addFrame(sim.currentState, sim.heights)
    for _ in range(frames - 1):
        exporter.addFrame(sim.update(0.05), sim.heights)
    return sim, exporter


######################################################################
# -- Frame Exporter -- #
######################################################################

def testFrameExporterCollectsCopies():
    sim, exporter = _runSimulation()

    assert exporter.nFrames == 5
    assert len(exporter.heightFrames) == 5
    np.testing.assert_array_equal(exporter.heightFrames[-1], sim.heights)

    sim.update(0.5)
    assert not np.array_equal(exporter.heightFrames[-1], sim.heights)


def testEnergyHistoryTracksFrames():
    _, exporter = _runSimulation()
    history = exporter.energyHistory

    assert len(history['times']) == len(history['energy']) == len(history['maxHeight']) == 5
    assert history['times'] == sorted(history['times'])
    assert history['maxHeight'][0] == pytest.approx(0.5)


def testFramesKeepOneHeightCopy():
    _, exporter = _runSimulation()

    assert all(set(frame) == {'time', 'step'} for frame in exporter._frames)
    assert all(isinstance(h, np.ndarray) for h in exporter.heightFrames)


def testFrameExporterWritesJson(tmp_path):
    sim, exporter = _runSimulation()

    path = exporter.export(sim.config, outputDir=str(tmp_path), scenarioName='unit')

    assert os.path.basename(path).startswith('heightFieldWaves_unit_')
    with open(path) as f:
        data = json.load(f)

    assert data['meta']['type'] == 'heightFieldWaves'
    assert data['meta']['nFrames'] == 5
    assert data['meta']['vertexCount'] == 72
    assert data['config']['rows'] == 8
    assert len(data['frames']) == 5
    assert np.asarray(data['frames'][0]['heights']).shape == (8, 9)
    assert data['frames'][0]['heights'][4][4] == 0.5
    assert len(data['energy']['energy']) == 5


######################################################################
# -- Mesh Exporter -- #
######################################################################

def testBuildMeshFromLiveSurface():
    sim, _ = _runSimulation()
    mesh = MeshExporter(sim).buildMesh()

    assert mesh.vertices.shape == (sim.vertexCount(), 3)
    assert mesh.faces.shape == (sim.triangleCount(), 3)
    np.testing.assert_allclose(mesh.vertices, sim.positions())


def testBuildMeshFromRecordedFrame():
    sim, exporter = _runSimulation()
    first = exporter.heightFrames[0]

    mesh = MeshExporter(sim).buildMesh(first)

    np.testing.assert_allclose(mesh.vertices[:, 1], first.ravel())
    np.testing.assert_allclose(mesh.vertices[:, 0], sim.grid.latticeX.ravel())


def testExportCurrent(tmp_path):
    sim, _ = _runSimulation()
    path = MeshExporter(sim).exportCurrent(str(tmp_path / 'meshes' / 'surface.stl'))

    assert os.path.isfile(path)
    assert os.path.getsize(path) > 0


def testExportSequence(tmp_path):
    sim, exporter = _runSimulation(frames=3)

    paths = MeshExporter(sim).exportSequence(exporter.heightFrames, str(tmp_path), fileType='obj', prefix='frame')

    assert [os.path.basename(p) for p in paths] == ['frame_00000.obj', 'frame_00001.obj', 'frame_00002.obj']
    assert all(os.path.isfile(p) for p in paths)


def testExportedHeightsMatchRecordedFrames(tmp_path):
    sim, exporter = _runSimulation()

    with open(exporter.export(sim.config, outputDir=str(tmp_path))) as f:
        frames = json.load(f)['frames']

    for frame, heights in zip(frames, exporter.heightFrames):
        np.testing.assert_allclose(frame['heights'], heights, atol=1e-4)
    assert [frame['step'] for frame in frames] == sorted(frame['step'] for frame in frames)
