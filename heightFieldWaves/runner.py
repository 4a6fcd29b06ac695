# -- Height-Field Wave Runner -- #

'''
Command-line entry point for running height-field wave simulations.

Plays the role of the host application: feeds per-frame elapsed time
(optionally jittered, to exercise fixed-step sub-stepping), schedules
random raindrops, reports progress, and optionally exports frame data,
surface meshes and diagnostic plots.

Usage:
    python -m heightFieldWaves                                  # Small pond, default rain
    python -m heightFieldWaves --preset standard                # 305 x 150 demo lake
    python -m heightFieldWaves --config configs/ripples_default.json
    python -m heightFieldWaves --jitter 0.5 --no-export         # Variable frame timing
'''

from __future__ import annotations

import argparse
import json
import os
import time as timeModule

import numpy as np

from heightFieldWaves import constants as const
from heightFieldWaves.solver.protocols import WaveConfig
from heightFieldWaves.waves import WaveSimulation
from heightFieldWaves.scenarios.rainfall import RainfallConfig, RainfallScheduler
from heightFieldWaves.export.frameExporter import FrameExporter


#--------------------------------------------------------------------#
# -- CLI Argument Parser -- #
#--------------------------------------------------------------------#

def buildParser() -> argparse.ArgumentParser:
    '''Build the CLI argument parser.'''
    parser = argparse.ArgumentParser(
        description='heightFieldWaves -- damped 2D wave equation on a height field',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to JSON configuration file',
    )
    parser.add_argument(
        '--preset', type=str, default='small',
        choices=['small', 'standard'],
        help='Grid preset (default: small)',
    )
    parser.add_argument(
        '--rain', type=str, default='default',
        choices=['default', 'drizzle', 'storm', 'none'],
        help='Raindrop preset (default: default)',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for raindrops',
    )
    parser.add_argument(
        '--duration', type=float, default=5.0,
        help='Host run time [s] (default: 5.0)',
    )
    parser.add_argument(
        '--frame-rate', type=float, default=60.0,
        help='Nominal host frame rate [Hz] (default: 60)',
    )
    parser.add_argument(
        '--jitter', type=float, default=0.0,
        help='Relative frame-time jitter in [0, 1) (default: 0)',
    )
    parser.add_argument(
        '--no-export', action='store_true',
        help='Skip frame data export',
    )
    parser.add_argument(
        '--mesh', action='store_true',
        help='Export the final surface as an STL mesh',
    )
    parser.add_argument(
        '--plot', action='store_true',
        help='Write Plotly HTML diagnostics',
    )
    parser.add_argument(
        '--output-dir', type=str, default='heightFieldWaves/output',
        help='Output directory (default: heightFieldWaves/output)',
    )

    return parser


#--------------------------------------------------------------------#
# -- Runner Class -- #
#--------------------------------------------------------------------#

class WaveSimRunner:
    '''
    Runs a height-field simulation as a host application would.

    Handles the full pipeline: surface setup, frame loop with raindrops
    and progress reporting, and optional export of frames, meshes and
    plots.
    '''

    def __init__(self) -> None:
        self._exporter: FrameExporter = FrameExporter()

    @property
    def exporter(self) -> FrameExporter:
        return self._exporter

    def runFromConfig(self, configPath: str, exportDir: str = 'heightFieldWaves/output') -> dict:
        '''
        Run a simulation from a JSON configuration file.

        Reads the 'grid', 'simulation', 'rain' and 'run' sections.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file
        exportDir : str
            Output directory for exports

        Returns:
        --------
        dict : Simulation results summary
        '''
        with open(configPath, 'r') as f:
            data = json.load(f)

        waveConfig = WaveConfig.fromDict(data)
        runSection = data.get('run', {})
        rainConfig = None
        if runSection.get('rain', True):
            rainConfig = RainfallConfig.fromDict(data)

        return self.run(
            waveConfig,
            rainConfig=rainConfig,
            duration=runSection.get('duration', 5.0),
            frameRate=runSection.get('frameRate', 60.0),
            jitter=runSection.get('jitter', 0.0),
            doExport=runSection.get('export', True),
            exportDir=exportDir,
        )

    def run(
        self,
        waveConfig: WaveConfig,
        rainConfig: RainfallConfig | None = None,
        duration: float = 5.0,
        frameRate: float = 60.0,
        jitter: float = 0.0,
        doExport: bool = True,
        doMesh: bool = False,
        doPlot: bool = False,
        exportDir: str = 'heightFieldWaves/output',
        outputInterval: float = 0.1,
        verbose: bool = True,
    ) -> dict:
        '''
        Run a rain-on-water simulation.

        Parameters:
        -----------
        waveConfig : WaveConfig
            Grid and time-stepping configuration
        rainConfig : RainfallConfig | None
            Raindrop cadence; None for a still surface with one central drop
        duration : float
            Host run time [s]
        frameRate : float
            Nominal host frame rate [Hz]
        jitter : float
            Relative frame-time jitter in [0, 1); each frame's delta is
            drawn uniformly from (1 +/- jitter) / frameRate
        doExport : bool
            Whether to export frame data as JSON
        doMesh : bool
            Whether to export the final surface as an STL mesh
        doPlot : bool
            Whether to write Plotly HTML diagnostics
        exportDir : str
            Output directory
        outputInterval : float
            Simulated seconds between recorded frames
        verbose : bool
            Print banners and progress rows

        Returns:
        --------
        dict : Simulation results summary
        '''
        if not 0.0 <= jitter < 1.0:
            raise ValueError(f'jitter must be in [0, 1), got {jitter}')
        if frameRate <= 0.0:
            raise ValueError(f'frameRate must be > 0, got {frameRate}')

        log = print if verbose else (lambda *args, **kwargs: None)

        log()
        log('=' * 62)
        log('  HEIGHTFIELDWAVES -- DAMPED WAVE SURFACE')
        log('=' * 62)
        log()

        #--------------------------------------------------------------------#
        # Surface Setup
        #--------------------------------------------------------------------#
        log('-' * 62)
        log('  SURFACE SETUP')
        log('-' * 62)

        simulation = WaveSimulation(waveConfig)

        log(f'  Grid:              {waveConfig.rows:5d} x {waveConfig.columns:<5d}')
        log(f'  Vertices:          {simulation.vertexCount():8d}')
        log(f'  Triangles:         {simulation.triangleCount():8d}')
        log(f'  Width x Depth:     {simulation.width():8.2f} x {simulation.depth():.2f}')
        log(f'  Spacing dx:        {waveConfig.spacing:8.4f}')
        log(f'  Time Step dt:      {waveConfig.timeStep:8.4f} s')
        log(f'  Wave Speed:        {waveConfig.waveSpeed:8.3f}')
        log(f'  Damping:           {waveConfig.damping:8.3f}')
        log(f'  Courant Number:    {waveConfig.courantNumber:8.4f}  (bound {const.stabilityBound:.4f})')
        if not waveConfig.isStable:
            log('  CAUTION: Courant number exceeds the stability bound;')
            log('           heights will diverge.')
        log()

        #--------------------------------------------------------------------#
        # Host Scheduling
        #--------------------------------------------------------------------#
        rain = None
        if rainConfig is not None:
            rain = RainfallScheduler(simulation, rainConfig)
            log(f'  Rain Interval:     {rainConfig.interval:8.3f} s')
            log(f'  Drop Magnitude:    {rainConfig.minMagnitude:8.3f} .. {rainConfig.maxMagnitude:.3f}')
        else:
            simulation.disturb(waveConfig.rows // 2, waveConfig.columns // 2, 1.0)
            log('  Rain:              off (single central drop)')

        frameRng = np.random.default_rng(rainConfig.seed if rainConfig is not None else None)
        nominalDelta = 1.0 / frameRate
        log(f'  Frame Rate:        {frameRate:8.1f} Hz  (jitter {jitter * 100:.0f}%)')
        log()

        self._exporter.addFrame(simulation.currentState, simulation.heights)

        #--------------------------------------------------------------------#
        # Frame Loop
        #--------------------------------------------------------------------#
        log('-' * 62)
        log('  RUNNING SIMULATION')
        log('-' * 62)
        log()
        log(f'  {"Host":>8}  {"SimTime":>8}  {"Steps":>8}  {"Drops":>6}  {"MaxH":>10}  {"Energy":>12}')
        log(f'  {"(s)":>8}  {"(s)":>8}  {"":>8}  {"":>6}  {"":>10}  {"":>12}')
        log('  ' + '-' * 58)

        wallClockStart = timeModule.time()
        hostTime = 0.0
        nFrames = 0
        nextOutputTime = outputInterval
        printInterval = max(0.1, duration / 20.0)
        nextPrintTime = printInterval
        state = simulation.currentState

        while hostTime < duration:
            delta = nominalDelta
            if jitter > 0.0:
                delta *= frameRng.uniform(1.0 - jitter, 1.0 + jitter)
            hostTime += delta
            nFrames += 1

            if rain is not None:
                rain.update(delta)

            state = simulation.update(delta)

            if state.time >= nextOutputTime:
                self._exporter.addFrame(state, simulation.heights)
                nextOutputTime += outputInterval

            if hostTime >= nextPrintTime:
                log(
                    f'  {hostTime:8.3f}  {state.time:8.3f}  {state.step:8d}  '
                    f'{rain.nDrops if rain is not None else 0:6d}  '
                    f'{state.maxHeight:10.4e}  {state.energy:12.5e}'
                )
                nextPrintTime += printInterval

        wallClockSeconds = timeModule.time() - wallClockStart
        finalState = simulation.currentState
        self._exporter.addFrame(finalState, simulation.heights)

        log()
        log('  Simulation complete.')
        log(f'  Host frames:       {nFrames:8d}')
        log(f'  Sub-steps:         {finalState.step:8d}')
        log(f'  Wall-clock time:   {wallClockSeconds:8.2f} s')
        log(f'  Frames recorded:   {self._exporter.nFrames:8d}')
        log()

        #--------------------------------------------------------------------#
        # Export
        #--------------------------------------------------------------------#
        exportPath = None
        meshPath = None
        plotPaths: list[str] = []

        if doExport or doMesh or doPlot:
            log('-' * 62)
            log('  EXPORTING')
            log('-' * 62)

        if doExport:
            exportPath = self._exporter.export(
                config=waveConfig,
                outputDir=exportDir,
                scenarioName='rainfall' if rain is not None else 'singleDrop',
            )
            log(f'  Frames:  {exportPath}')

        if doMesh:
            from heightFieldWaves.export.meshExporter import MeshExporter

            meshPath = MeshExporter(simulation).exportCurrent(
                os.path.join(exportDir, 'surface_final.stl'),
            )
            log(f'  Mesh:    {meshPath}')

        if doPlot:
            from heightFieldWaves.visualization.surfacePlots import plotHeightField, plotEnergyHistory

            os.makedirs(exportDir, exist_ok=True)
            surfacePath = os.path.join(exportDir, 'surface_final.html')
            energyPath = os.path.join(exportDir, 'energy_history.html')
            plotHeightField(simulation).write_html(surfacePath)
            plotEnergyHistory(self._exporter.energyHistory).write_html(energyPath)
            plotPaths = [surfacePath, energyPath]
            for path in plotPaths:
                log(f'  Plot:    {path}')

        if doExport or doMesh or doPlot:
            log()

        #--------------------------------------------------------------------#
        # Summary
        #--------------------------------------------------------------------#
        log('=' * 62)
        log('  SIMULATION SUMMARY')
        log('=' * 62)
        log(f'  Simulated Time:    {finalState.time:10.4f} s')
        log(f'  Host Time:         {hostTime:10.4f} s')
        log(f'  Final Energy:      {finalState.energy:12.5e}')
        log(f'  Max |Height|:      {finalState.maxHeight:12.5e}')
        log(f'  Raindrops:         {rain.nDrops if rain is not None else 0:10d}')
        log('=' * 62)
        log()

        return {
            'finalState': finalState,
            'simulation': simulation,
            'hostTime': hostTime,
            'hostFrames': nFrames,
            'drops': rain.drops if rain is not None else [],
            'wallClockSeconds': wallClockSeconds,
            'nFrames': self._exporter.nFrames,
            'exportPath': exportPath,
            'meshPath': meshPath,
            'plotPaths': plotPaths,
        }


#--------------------------------------------------------------------#
# -- CLI Entry Point -- #
#--------------------------------------------------------------------#

def main(argv: list[str] | None = None) -> None:
    '''CLI entry point.'''
    parser = buildParser()
    args = parser.parse_args(argv)

    runner = WaveSimRunner()

    if args.config:
        runner.runFromConfig(args.config, exportDir=args.output_dir)
        return

    wavePresets = {
        'small': WaveConfig.small,
        'standard': WaveConfig.standard,
    }
    rainPresets = {
        'default': RainfallConfig,
        'drizzle': RainfallConfig.drizzle,
        'storm': RainfallConfig.storm,
    }

    waveConfig = wavePresets[args.preset]()
    rainConfig = None
    if args.rain != 'none':
        rainConfig = rainPresets[args.rain]()
        rainConfig.seed = args.seed

    runner.run(
        waveConfig,
        rainConfig=rainConfig,
        duration=args.duration,
        frameRate=args.frame_rate,
        jitter=args.jitter,
        doExport=not args.no_export,
        doMesh=args.mesh,
        doPlot=args.plot,
        exportDir=args.output_dir,
    )


if __name__ == '__main__':
    main()
