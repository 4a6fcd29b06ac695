# -- Visualization Subpackage -- #

'''
Plotly-based diagnostic plots of the height field and its energy history.
'''

from heightFieldWaves.visualization.surfacePlots import (
    plotHeightField,
    plotEnergyHistory,
    plotCrossSection,
)
