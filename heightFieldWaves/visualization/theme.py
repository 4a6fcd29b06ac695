# -- Visualization Theme -- #

'''
Centralized dark-mode theme for all height-field Plotly visualizations.

Change colors or template here to restyle every plot at once.
'''

# Plotly template
TEMPLATE = 'plotly_dark'

# Primary color palette (Material Design, visible on dark backgrounds)
BLUE = '#42A5F5'
ORANGE = '#FFA726'
CYAN = '#26C6DA'

# Neutrals
REFERENCE_LINE = '#888888'

# Water surface colorscale, trough to crest
WATER_COLORSCALE = [
    [0.0, '#0D47A1'],
    [0.5, '#1E88E5'],
    [1.0, '#B3E5FC'],
]
