# -- Export Package -- #

'''
Data export utilities for height-field simulation results.

Exports frame data as JSON and surface meshes as STL/OBJ/PLY.
'''

from heightFieldWaves.export.frameExporter import FrameExporter
from heightFieldWaves.export.meshExporter import MeshExporter
