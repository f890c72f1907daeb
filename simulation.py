# =============================================================================
# SIMULATION - Layer Coordinator
# =============================================================================
# Starts the simulation coordinating:
# - L3: Sensor Layer (scene, simulated depth sensor)
# - L4: Perception Layer (depth grid, blob extraction)
# - L5: Sonification Layer (thing tracking, audio channels)
# =============================================================================

import numpy as np
import os
import argparse
import json
import logging
from collections import deque
from datetime import datetime

import pandas as pd

from L3_sensor import SensorWorld, SceneGenerator, DEFAULT_DT, DEFAULT_SIMULATION_STEPS
from L5_sonification import (
    SonificationLayer,
    LoopedSoundCollection,
    TrackingUpdate,
    pan_of,
    vol_of
)

logger = logging.getLogger(__name__)


# =============================================================================
# Tracking Metrics (for evaluation)
# =============================================================================
class TrackingMetrics:
    """Aggregates per-frame tracking outcomes."""

    def __init__(self):
        self.frames = []
        self.lifetimes = {}

    def record(self, update: TrackingUpdate, num_points: int):
        self.frames.append({
            'frame': update.frame,
            'points': num_points,
            'things': len(update.things),
            'created': len(update.created),
            'continued': len(update.continued),
            'released': len(update.released),
            'rejected': len(update.rejected)
        })
        for thing in update.things:
            self.lifetimes[thing.id] = thing.last_seen - thing.first_seen + 1

    def compute_metrics(self) -> dict:
        metrics = {}

        if self.frames:
            df = pd.DataFrame(self.frames)
            metrics['frames'] = {
                'total': len(df),
                'mean_points': float(df['points'].mean()),
                'mean_things': float(df['things'].mean()),
                'max_things': int(df['things'].max())
            }
            metrics['events'] = {
                'created': int(df['created'].sum()),
                'continued': int(df['continued'].sum()),
                'released': int(df['released'].sum()),
                'rejected': int(df['rejected'].sum())
            }

        if self.lifetimes:
            lifetimes = np.array(list(self.lifetimes.values()))
            metrics['thing_lifetime_frames'] = {
                'mean': float(np.mean(lifetimes)),
                'min': int(np.min(lifetimes)),
                'max': int(np.max(lifetimes))
            }

        return metrics

    def export_to_json(self, filename: str) -> dict:
        metrics = self.compute_metrics()
        output = {
            'timestamp': datetime.now().isoformat(),
            'metrics': metrics
        }
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(output, f, indent=2, ensure_ascii=False, default=str)
        return metrics


# =============================================================================
# Simulation Controller
# =============================================================================
class SimulationController:
    """
    Main controller that coordinates the three layers.
    """

    def __init__(self, dt: float = DEFAULT_DT, steps: int = DEFAULT_SIMULATION_STEPS,
                 scenario: str = 'crossing', association: str = 'greedy',
                 seed: int = None):
        self.dt = dt
        self.steps = steps
        self.association = association

        # Layer 3: Sensor
        self.world = SensorWorld(dt=dt, scenario=scenario, seed=seed)

        # Layer 4+5: Perception and sonification
        self.sound_collection = LoopedSoundCollection()
        self.sonification = SonificationLayer(self.sound_collection,
                                              association=association)

        self.thing_log = []
        self.metrics = TrackingMetrics()
        self.volume_history = {}
        self.time_data = deque(maxlen=100)

        print(f"  Scenario: {scenario.upper()}")
        print(f"  Association: {association.upper()}")

    @property
    def scenario(self) -> str:
        return self.world.scenario

    def reset_scenario(self, scenario: str):
        """Resets and configures a scenario."""
        self.sonification.reset()
        self.world.reset(scenario)
        self.thing_log = []
        self.metrics = TrackingMetrics()
        self.volume_history.clear()
        self.time_data.clear()
        logger.info("Scenario %s initialized", scenario)

    def step(self, frame: int) -> dict:
        """
        Executes one simulation step.

        Returns:
            Dictionary with all current frame data
        """
        points = self.world.update()
        update = self.sonification.process_point_cloud(points)

        current_time = self.world.current_time
        self.time_data.append(current_time)
        self.metrics.record(update, len(points))

        for thing in update.things:
            blob = thing.blob
            self.thing_log.append({
                'time': current_time,
                'frame': update.frame,
                'thing_id': thing.id,
                'channel': thing.channel_id,
                'size': blob.size,
                'r': blob.average_r,
                'theta': blob.average_theta,
                'phi': blob.average_phi,
                'volume': vol_of(thing),
                'pan': pan_of(thing)
            })
            if thing.channel_id not in self.volume_history:
                self.volume_history[thing.channel_id] = deque(maxlen=100)
            self.volume_history[thing.channel_id].append((current_time, vol_of(thing)))

        return {
            'frame': frame,
            'time': current_time,
            'points': points,
            'grid': self.sonification.perception.last_grid,
            'update': update,
            'ground_truth_objects': self.world.get_state()['objects']
        }

    def run_headless(self):
        """Runs all steps without visualization."""
        for frame in range(self.steps):
            self.step(frame)

    def save_logs(self, base_log_dir: str = "log") -> dict:
        """Saves logs and metrics to files in organized subfolders."""
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')

        thing_log_dir = os.path.join(base_log_dir, "thing_log")
        metrics_dir = os.path.join(base_log_dir, "tracking_metrics")
        for directory in [thing_log_dir, metrics_dir]:
            os.makedirs(directory, exist_ok=True)

        # CSV - Thing Log
        if self.thing_log:
            df = pd.DataFrame(self.thing_log)
            csv_file = os.path.join(
                thing_log_dir,
                f"thing_log_{self.scenario}_{timestamp}.csv"
            )
            df.to_csv(csv_file, index=False, encoding='utf-8')
            print(f"Log saved: {csv_file}")

        # JSON - Tracking Metrics
        json_file = os.path.join(
            metrics_dir,
            f"tracking_metrics_{self.scenario}_{timestamp}.json"
        )
        metrics = self.metrics.export_to_json(json_file)
        print(f"Metrics saved: {json_file}")

        print(f"\n{'='*60}")
        print("METRICS SUMMARY")
        print(f"{'='*60}")
        if 'events' in metrics:
            events = metrics['events']
            print(f"Created: {events['created']} | Continued: {events['continued']} | "
                  f"Released: {events['released']} | Rejected: {events['rejected']}")
        if 'thing_lifetime_frames' in metrics:
            print(f"Mean thing lifetime: {metrics['thing_lifetime_frames']['mean']:.1f} frames")
        print(f"{'='*60}\n")
        return metrics

    def close(self):
        self.sonification.shutdown()
        self.sound_collection.close()


# =============================================================================
# Visualization
# =============================================================================
class SimulationVisualizer:
    """
    Simulation visualization with matplotlib.
    """

    def __init__(self, controller: SimulationController):
        import matplotlib.pyplot as plt
        from matplotlib.widgets import Button

        self.plt = plt
        self.controller = controller

        self.fig = plt.figure(figsize=(14, 8))
        gs = self.fig.add_gridspec(2, 2, hspace=0.35, wspace=0.25,
                                   left=0.06, right=0.97, top=0.93, bottom=0.12)
        self.ax_grid = self.fig.add_subplot(gs[:, 0])
        self.ax_channels = self.fig.add_subplot(gs[0, 1])
        self.ax_volume = self.fig.add_subplot(gs[1, 1])

        self.buttons = []
        for k, scenario in enumerate(SceneGenerator.SCENARIOS):
            ax_btn = plt.axes([0.08 + 0.2 * k, 0.01, 0.16, 0.04])
            btn = Button(ax_btn, scenario.capitalize(), color='lightblue')
            btn.on_clicked(lambda e, s=scenario: self.controller.reset_scenario(s))
            self.buttons.append(btn)

        self.fig.canvas.mpl_connect('close_event', self._on_close)

    def _on_close(self, event):
        print("\n" + "="*60)
        print("SAVING LOGS AND METRICS...")
        print("="*60)
        self.controller.save_logs()

    def animate(self, frame: int):
        """Animation function."""
        data = self.controller.step(frame)
        update = data['update']
        grid = data['grid']
        quantizer = self.controller.sonification.perception.quantizer
        h_span, v_span = quantizer.horiz_span, quantizer.vert_span

        # === Depth Grid ===
        self.ax_grid.clear()
        finite = np.where(np.isfinite(grid), grid, np.nan)
        self.ax_grid.imshow(finite.T, origin='lower', cmap='viridis_r',
                            extent=(-h_span / 2, h_span / 2, -v_span / 2, v_span / 2),
                            vmin=0.0, vmax=3.0)
        for thing in update.things:
            b = thing.blob
            self.ax_grid.plot(b.average_theta, b.average_phi, 'r+', markersize=14, mew=2)
            self.ax_grid.annotate(f'ch{thing.channel_id}\nr={b.average_r:.2f}',
                                  (b.average_theta, b.average_phi + 0.12),
                                  ha='center', fontsize=8, color='red')
        self.ax_grid.set_xlabel('theta (rad)')
        self.ax_grid.set_ylabel('phi (rad)')
        self.ax_grid.set_title(
            f'Depth Grid | {self.controller.scenario} | Frame {update.frame}\n'
            f'Things: {len(update.things)} (+{len(update.created)} '
            f'-{len(update.released)} rejected {len(update.rejected)})',
            fontsize=10, fontweight='bold')

        # === Channels ===
        self.ax_channels.clear()
        pool = self.controller.sound_collection
        ids = list(range(1, pool.size + 1))
        states = [pool.get_channel_state(i) for i in ids]
        self.ax_channels.bar([i - 0.2 for i in ids], [s.left_volume for s in states],
                             width=0.4, label='left')
        self.ax_channels.bar([i + 0.2 for i in ids], [s.right_volume for s in states],
                             width=0.4, label='right')
        self.ax_channels.set_ylim(0, 1)
        self.ax_channels.set_xticks(ids)
        self.ax_channels.set_title('Channel Gains', fontsize=10, fontweight='bold')
        self.ax_channels.legend(loc='upper right', fontsize=7)

        # === Volume History ===
        if frame % 2 == 0:
            self.ax_volume.clear()
            for channel_id, values in self.controller.volume_history.items():
                if values:
                    times, vols = zip(*values)
                    self.ax_volume.plot(times, vols, '.-', label=f'ch {channel_id}')
            if self.controller.volume_history:
                self.ax_volume.legend(loc='upper right', fontsize=7, ncol=2)
            self.ax_volume.set_ylim(0, 1)
            self.ax_volume.set_xlabel('Time (s)')
            self.ax_volume.set_ylabel('Volume')
            self.ax_volume.grid(True, alpha=0.35)

    def run(self):
        """Starts the animation."""
        from matplotlib import animation

        self.ani = animation.FuncAnimation(
            self.fig, self.animate,
            frames=self.controller.steps,
            interval=int(self.controller.dt * 1000), repeat=False
        )
        self.plt.show()


# =============================================================================
# Argument Parser
# =============================================================================
def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='simulation.py',
        description="""
  POINT-CLOUD SONIFICATION - LAYERED ARCHITECTURE

  LAYERS:
    L3: Sensor Layer        - Simulated depth sensor and moving objects
    L4: Perception Layer    - Angular depth grid, blob extraction
    L5: Sonification Layer  - Thing tracking, looped sound per thing

  SCENARIOS (--scenario):
    single   - One object approaching and receding on the optical axis
    crossing - Two objects crossing the field of view
    crowd    - More objects than available things
    empty    - Nothing in range
""",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--scenario',
        type=str,
        choices=list(SceneGenerator.SCENARIOS),
        default='crossing',
        help='Scene preset (default: crossing)'
    )
    parser.add_argument(
        '--association',
        type=str,
        choices=['greedy', 'hungarian'],
        default='greedy',
        help='Blob-to-thing association (default: greedy)'
    )
    parser.add_argument(
        '--dt',
        type=float,
        default=DEFAULT_DT,
        metavar='SEC',
        help=f'Time between frames in seconds (default: {DEFAULT_DT})'
    )
    parser.add_argument(
        '--steps',
        type=int,
        default=DEFAULT_SIMULATION_STEPS,
        metavar='N',
        help=f'Number of frames (default: {DEFAULT_SIMULATION_STEPS})'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for scene and sensor noise'
    )
    parser.add_argument(
        '--no-gui',
        action='store_true',
        help='Run headless and save logs at the end'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )

    return parser.parse_args(argv)


# =============================================================================
# Main Entry Point
# =============================================================================
def main(argv=None):
    args = parse_arguments(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    print("="*60)
    print("POINT-CLOUD SONIFICATION - LAYERED ARCHITECTURE")
    print("="*60)

    controller = SimulationController(
        dt=args.dt,
        steps=args.steps,
        scenario=args.scenario,
        association=args.association,
        seed=args.seed
    )

    try:
        if args.no_gui:
            controller.run_headless()
            controller.save_logs()
        else:
            print("="*60)
            print("COMMANDS:")
            print("  - Buttons to change scenario")
            print("  - Close window to save logs and metrics")
            print("="*60)
            visualizer = SimulationVisualizer(controller)
            visualizer.run()
    finally:
        controller.close()


if __name__ == "__main__":
    main()
