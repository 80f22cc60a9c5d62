"""
CLI entry point for tennis umpire: replays a recorded match through a
court tracking session and writes a JSON summary.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from tennis_umpire import CourtTrackingSession, VideoLoader, YoloDetector


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tennis court line calls from a recorded match",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "--input", "-i",
        required=True,
        help="Path to input video file"
    )

    parser.add_argument(
        "--output", "-o",
        default=None,
        help="JSON summary path (default: <input>_umpire.json)"
    )

    parser.add_argument(
        "--max-frames", "-m",
        type=int,
        default=None,
        help="Maximum frames to process (default: all)"
    )

    parser.add_argument(
        "--start", "-s",
        type=float,
        default=0.0,
        help="Start replay at this many seconds into the video"
    )

    parser.add_argument(
        "--low-power",
        action="store_true",
        help="Analyse court geometry on 1 in 3 frames at half resolution"
    )

    parser.add_argument(
        "--no-detector",
        action="store_true",
        help="Court geometry only; skip YOLO ball and pose detection"
    )

    parser.add_argument(
        "--frames-json",
        action="store_true",
        help="Include per-frame analysis in the JSON output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress progress bar"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging"
    )

    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}")
        sys.exit(1)
    output_path = Path(args.output) if args.output else \
        input_path.with_name(f"{input_path.stem}_umpire.json")

    session  = CourtTrackingSession(low_power=args.low_power)
    detector = None if args.no_detector else YoloDetector()
    frames   = []

    print(f"Processing: {args.input}")
    try:
        with VideoLoader(str(input_path)) as loader:
            meta = loader.metadata
            total = max(meta.total_frames - int(round(args.start * meta.fps)), 0)
            if args.max_frames:
                total = min(total, args.max_frames)

            frames_iter = loader.frames(max_frames=args.max_frames,
                                        start_s=args.start)
            if not args.quiet:
                frames_iter = tqdm(frames_iter, total=total,
                                   desc="Processing", unit="frames")

            for ts, frame, image in frames_iter:
                objects = detector.detect_objects(image) if detector else []
                poses   = detector.detect_poses(image) if detector else []
                analysis = session.process(frame, objects, poses, timestamp=ts)
                if args.frames_json:
                    frames.append(analysis.to_dict())

    except KeyboardInterrupt:
        print("\nProcessing interrupted by user.")
    except IOError as e:
        print(f"Error during processing: {e}")
        sys.exit(1)

    summary = {"video": meta.to_dict(), **session.summary()}
    if args.frames_json:
        summary["frames"] = frames
    output_path.write_text(json.dumps(summary, indent=2))

    stats = session.stats
    print("\n--- Processing Complete ---")
    print(f"Frames ingested:  {stats.frames_ingested}")
    print(f"Frames analysed:  {stats.frames_analysed}")
    print(f"Court detected:   {session.court_model.detected}  "
          f"(conf={session.court_model.confidence:.2f})")
    print(f"Rally length:     {stats.rally_length} frames")
    print(f"Foot faults:      {stats.foot_faults}")
    print(f"Summary written:  {output_path}")


if __name__ == "__main__":
    main()
