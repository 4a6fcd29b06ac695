# -- Water Surface Mesh Exporter -- #

'''
Exports the height-field surface as a triangle mesh (STL, OBJ, PLY).

Builds a trimesh.Trimesh from the simulation's vertex positions, index
buffer and per-vertex normals, so a frame can be inspected in any mesh
viewer or CAD tool without the renderer.
'''

from __future__ import annotations

from pathlib import Path

import numpy as np

try:
    import trimesh
except ImportError:
    trimesh = None

from tqdm import tqdm

from heightFieldWaves.solver.gridState import GridState
from heightFieldWaves.solver.meshTopology import buildTriangleIndices
from heightFieldWaves.waves import WaveSimulation


class MeshExporter:
    '''
    Converts height-field frames to triangle meshes and writes them.

    Parameters:
    -----------
    simulation : WaveSimulation
        Surface whose lattice and current state are exported

    Examples:
    ---------
    >>> exporter = MeshExporter(sim)
    >>> exporter.exportCurrent('output/surface.stl')
    '''

    def __init__(self, simulation: WaveSimulation) -> None:
        if trimesh is None:
            raise ImportError(
                'trimesh is required for mesh export. '
                'Install with: pip install trimesh'
            )

        self._simulation = simulation
        self._faces = buildTriangleIndices(simulation.rowCount(), simulation.columnCount())

    def buildMesh(self, heights: np.ndarray | None = None) -> trimesh.Trimesh:
        '''
        Triangle mesh of the surface.

        Parameters:
        -----------
        heights : np.ndarray | None
            Height grid (m, n) to use instead of the live surface, e.g. a
            recorded frame. Normals are then derived from the lattice.

        Returns:
        --------
        trimesh.Trimesh : Surface mesh (not processed, vertex order kept)
        '''
        grid: GridState = self._simulation.grid

        if heights is None:
            vertices = self._simulation.positions()
            normals = self._simulation.normals()
            return trimesh.Trimesh(
                vertices=vertices,
                faces=self._faces,
                vertex_normals=normals,
                process=False,
            )

        vertices = np.column_stack([
            grid.latticeX.ravel(),
            np.asarray(heights, dtype=np.float64).ravel(),
            grid.latticeZ.ravel(),
        ])
        return trimesh.Trimesh(vertices=vertices, faces=self._faces, process=False)

    def exportCurrent(self, outputPath: str) -> str:
        '''
        Export the live surface. Format follows the file extension.

        Returns:
        --------
        str : Path to the exported file
        '''
        outPath = Path(outputPath)
        outPath.parent.mkdir(parents=True, exist_ok=True)

        mesh = self.buildMesh()
        mesh.export(str(outPath))

        print(f'Exported {outPath.name}: '
              f'{len(mesh.vertices)} vertices, '
              f'{len(mesh.faces)} faces')

        return str(outPath)

    def exportSequence(
        self,
        heightFrames: list[np.ndarray],
        outputDir: str,
        fileType: str = 'stl',
        prefix: str = 'surface',
    ) -> list[str]:
        '''
        Export one mesh per recorded height frame.

        Parameters:
        -----------
        heightFrames : list[np.ndarray]
            Height grids, each shape (m, n)
        outputDir : str
            Output directory
        fileType : str
            Mesh format extension: 'stl', 'obj' or 'ply'
        prefix : str
            Filename prefix; files are named '{prefix}_{index:05d}.{fileType}'

        Returns:
        --------
        list[str] : Paths to the exported files
        '''
        outDir = Path(outputDir)
        outDir.mkdir(parents=True, exist_ok=True)

        paths = []
        for index, heights in enumerate(tqdm(heightFrames, desc='Exporting meshes')):
            path = outDir / f'{prefix}_{index:05d}.{fileType}'
            self.buildMesh(heights).export(str(path))
            paths.append(str(path))

        return paths
