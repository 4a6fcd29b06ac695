# -- Height-Field Visualizations -- #

'''
Plotly-based interactive plots for inspecting a wave simulation run.
'''

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from heightFieldWaves.visualization import theme
from heightFieldWaves.waves import WaveSimulation


def plotHeightField(
    simulation: WaveSimulation,
    heights: np.ndarray | None = None,
    title: str | None = None,
) -> go.Figure:
    '''
    3D surface of the height field.

    Parameters:
    -----------
    simulation : WaveSimulation
        Simulation providing the lattice (and heights if none given)
    heights : np.ndarray | None
        Height grid (m, n) to plot instead of the live surface
    title : str | None
        Figure title

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    grid = simulation.grid
    z = simulation.heights if heights is None else np.asarray(heights)

    fig = go.Figure()

    # Plotly's z axis is up; map world (x, h, z) to plot (x, z, h)
    fig.add_trace(go.Surface(
        x=grid.latticeX,
        y=grid.latticeZ,
        z=z,
        colorscale=theme.WATER_COLORSCALE,
        colorbar=dict(title='Height'),
        name='Surface',
    ))

    config = simulation.config
    fig.update_layout(
        title=title or (
            f'Height Field ({config.rows} x {config.columns}, '
            f't = {simulation.time:.2f} s, Courant = {config.courantNumber:.3f})'
        ),
        scene=dict(
            xaxis_title='x',
            yaxis_title='z',
            zaxis_title='height',
            aspectmode='manual',
            aspectratio=dict(x=1.0, y=config.depth / config.width, z=0.3),
        ),
        template=theme.TEMPLATE,
        height=600,
    )

    return fig


def plotEnergyHistory(energyHistory: dict[str, list[float]]) -> go.Figure:
    '''
    Discrete wave energy and peak height over simulated time.

    Parameters:
    -----------
    energyHistory : dict[str, list[float]]
        Mapping with 'times', 'energy' and 'maxHeight' series, as kept by
        FrameExporter.energyHistory

    Returns:
    --------
    go.Figure : Plotly figure with 2 stacked subplots
    '''
    times = energyHistory['times']

    fig = make_subplots(
        rows=2, cols=1, shared_xaxes=True,
        subplot_titles=('Discrete Wave Energy', 'Peak |Height|'),
    )

    fig.add_trace(
        go.Scatter(x=times, y=energyHistory['energy'], mode='lines', name='Energy',
                   line=dict(color=theme.ORANGE, width=2)),
        row=1, col=1,
    )
    fig.add_trace(
        go.Scatter(x=times, y=energyHistory['maxHeight'], mode='lines', name='Max height',
                   line=dict(color=theme.CYAN, width=2)),
        row=2, col=1,
    )

    fig.update_xaxes(title_text='Time (s)', row=2, col=1)
    fig.update_layout(template=theme.TEMPLATE, height=550, showlegend=False)

    return fig


def plotCrossSection(
    simulation: WaveSimulation,
    row: int | None = None,
) -> go.Figure:
    '''
    Height profile along one grid row.

    Parameters:
    -----------
    simulation : WaveSimulation
        Simulation to sample
    row : int | None
        Grid row to plot (defaults to the middle row)

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    grid = simulation.grid
    if row is None:
        row = grid.rows // 2

    x = grid.latticeX[row]
    h = simulation.heights[row]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=x, y=h, mode='lines+markers', name=f'row {row}',
        line=dict(color=theme.BLUE, width=2),
        marker=dict(size=3),
    ))
    fig.add_hline(y=0, line=dict(color=theme.REFERENCE_LINE, dash='dash', width=1))

    stable = 'stable' if simulation.config.isStable else 'UNSTABLE'
    fig.update_layout(
        title=f'Cross Section at Row {row} (t = {simulation.time:.2f} s, {stable})',
        xaxis_title='x',
        yaxis_title='Height',
        template=theme.TEMPLATE,
        height=400,
    )

    return fig
