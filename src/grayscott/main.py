"""
Command-line interface for Gray-Scott simulation.

Usage:
    python -m grayscott.main --help
    python -m grayscott.main --steps 5000 --visualize
    python -m grayscott.main --width 128 --height 128 --save-frames output/
"""

import argparse
import json
import sys
from pathlib import Path

import mlx.core as mx

from .config import Config
from .orchestrator import Orchestrator
from .simulation import Simulation
from .visualization import Visualizer, save_state_images
from .metrics import compute_all_metrics, print_metrics_summary


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all options."""
    parser = argparse.ArgumentParser(
        description="Gray-Scott reaction-diffusion simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Basic options
    parser.add_argument(
        "--steps", type=int, default=1000,
        help="Number of simulation steps"
    )

    # Grid options
    parser.add_argument("--width", type=int, default=100, help="Resolution in x")
    parser.add_argument("--height", type=int, default=100, help="Resolution in y")
    parser.add_argument(
        "--seed-region", type=int, nargs=4, default=None,
        metavar=("XMIN", "XMAX", "YMIN", "YMAX"),
        help="Extra rectangle to seed after the default centered block"
    )

    # Visualization options
    parser.add_argument(
        "--visualize", action="store_true",
        help="Show live visualization"
    )
    parser.add_argument(
        "--mode", type=str, default="gray",
        choices=["gray", "species", "composite"],
        help="Image mode for live display and animations"
    )
    parser.add_argument(
        "--fps", type=int, default=30,
        help="Frames per second for visualization"
    )
    parser.add_argument(
        "--save-frames", type=str, default=None,
        help="Directory to save frame images"
    )
    parser.add_argument(
        "--save-interval", type=int, default=100,
        help="Save frame every N steps"
    )
    parser.add_argument(
        "--save-animation", type=str, default=None,
        help="Path to save animation (mp4 or gif)"
    )

    # Analysis options
    parser.add_argument(
        "--print-metrics", action="store_true",
        help="Print all metrics at end"
    )
    parser.add_argument(
        "--save-metrics", type=str, default=None,
        help="Save metrics to JSON file"
    )

    # Config parameter overrides
    parser.add_argument("--dA", type=float, default=None, dest="D_A",
                        help="Diffusion rate of chemical A")
    parser.add_argument("--dB", type=float, default=None, dest="D_B",
                        help="Diffusion rate of chemical B")
    parser.add_argument("--feed", type=float, default=None, help="Feed rate")
    parser.add_argument("--kill", type=float, default=None, help="Kill rate")
    parser.add_argument("--render-interval", type=int, default=None, dest="render_interval",
                        help="Steps between rendering passes")

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_args(args)
        sim = Simulation(config)
        if args.seed_region is not None:
            sim.seed(*args.seed_region)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    print(f"Gray-Scott Simulation")
    print(f"  Grid: {config.width}x{config.height}")
    print(f"  dA={config.D_A}, dB={config.D_B}, feed={config.feed}, kill={config.kill}")
    print(f"  Steps: {args.steps}")
    print()

    # Check MLX device
    print(f"MLX device: {mx.default_device()}")
    print()

    # Display paths render through the orchestrator cadence
    if args.visualize:
        viz = Visualizer(Orchestrator(simulation=sim), mode=args.mode, fps=args.fps)
        viz.show_live(steps=args.steps)
        return 0

    # Save animation mode
    if args.save_animation:
        viz = Visualizer(Orchestrator(simulation=sim), mode=args.mode, fps=args.fps)
        viz.save_animation(args.save_animation, steps=args.steps)
        return 0

    # Frame saving callback
    frame_callback = None
    if args.save_frames:
        output_dir = Path(args.save_frames)
        output_dir.mkdir(parents=True, exist_ok=True)

        def frame_callback(s) -> None:
            save_state_images(s.snapshot(), str(output_dir), "frame", s.step_count)
            print(f"  Saved frame at step {s.step_count}")

    # Headless run: no rendering cadence, frames are saved by callback
    print("Running simulation...")
    sim.run(
        args.steps,
        callback=frame_callback,
        callback_interval=args.save_interval,
        show_progress=True,
    )

    print()

    if args.print_metrics or args.save_metrics:
        metrics = compute_all_metrics(sim.snapshot())

        if args.print_metrics:
            print_metrics_summary(metrics)

        if args.save_metrics:
            with open(args.save_metrics, "w") as f:
                json.dump(metrics, f, indent=2)
            print(f"Metrics saved to {args.save_metrics}")

    print("Simulation complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
