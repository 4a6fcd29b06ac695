# -- Surface Plot Tests -- #

import plotly.graph_objects as go

from heightFieldWaves import WaveSimulation, WaveConfig
from heightFieldWaves.export import FrameExporter
from heightFieldWaves.visualization import theme, plotHeightField, plotEnergyHistory, plotCrossSection


def _simulation() -> WaveSimulation:
    sim = WaveSimulation(WaveConfig(rows=10, columns=12, spacing=1.0, timeStep=0.03, waveSpeed=4.0, damping=0.2))
    sim.disturb(5, 6, 0.5)
    sim.update(0.1)
    return sim


def testHeightFieldSurface():
    sim = _simulation()
    fig = plotHeightField(sim)

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    assert fig.data[0].type == 'surface'
    assert len(fig.data[0].z) == 10
    assert 'Height Field (10 x 12' in fig.layout.title.text


def testHeightFieldCustomTitle():
    fig = plotHeightField(_simulation(), title='Frame 3')
    assert fig.layout.title.text == 'Frame 3'


def testEnergyHistoryHasTwoPanels():
    sim = _simulation()
    exporter = FrameExporter()
    for _ in range(4):
        exporter.addFrame(sim.update(0.05), sim.heights)

    fig = plotEnergyHistory(exporter.energyHistory)

    assert len(fig.data) == 2
    assert list(fig.data[0].x) == exporter.energyHistory['times']
    assert list(fig.data[1].y) == exporter.energyHistory['maxHeight']


def testCrossSectionDefaultsToMiddleRow():
    sim = _simulation()
    fig = plotCrossSection(sim)

    assert fig.data[0].name == 'row 5'
    assert len(fig.data[0].x) == sim.columnCount()
    assert 'stable' in fig.layout.title.text


def testCrossSectionFlagsUnstableConfig():
    sim = WaveSimulation(WaveConfig(rows=6, columns=6, spacing=1.0, timeStep=0.5, waveSpeed=4.0, damping=0.0))
    fig = plotCrossSection(sim, row=2)

    assert 'UNSTABLE' in fig.layout.title.text


def testPlotsUseThemePalette():
    sim = _simulation()
    exporter = FrameExporter()
    exporter.addFrame(sim.currentState, sim.heights)

    energy = plotEnergyHistory(exporter.energyHistory)
    section = plotCrossSection(sim)

    assert energy.data[0].line.color == theme.ORANGE
    assert energy.data[1].line.color == theme.CYAN
    assert section.data[0].line.color == theme.BLUE
    assert section.layout.shapes[0].line.color == theme.REFERENCE_LINE
