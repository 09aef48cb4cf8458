"""
dump_bounces.py - List the bounces recorded in a simulation-data.json trace.

Usage:
    python tools/dump_bounces.py src/simulation-data.json
    python tools/dump_bounces.py src/simulation-data.json --limit 20

Bounce frames are recovered from the trace alone (the frame before each
bounceCount step), so this works on any trace the renderer would load.
"""
import argparse
import math
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from BSAE.SMM.constants import FPS, CIRCLE_CENTER_X, CIRCLE_CENTER_Y
from BSAE.SGM.wav_export import read_trace
from BSAE.SVM.trace_check import bounce_frames


def main():
    parser = argparse.ArgumentParser(description="Dump bounce frames from a trace")
    parser.add_argument("trace", help="Path to simulation-data.json")
    parser.add_argument("--limit", type=int, default=0,
                        help="Only print the first N bounces (0 = all)")
    args = parser.parse_args()

    frames = read_trace(args.trace)
    bounces = bounce_frames(frames)

    print("=" * 60)
    print(f"Trace    : {args.trace}")
    print(f"Frames   : {len(frames):,}  ({len(frames) / FPS:.2f} s @ {FPS} fps)")
    print(f"Bounces  : {len(bounces)}")
    print("=" * 60)
    print(f"  {'#':>4}  {'Frame':>6}  {'Time (s)':>8}  {'x':>8}  {'y':>8}  {'r':>7}")

    shown = bounces[:args.limit] if args.limit > 0 else bounces
    for n, f in enumerate(shown, start=1):
        # the post-bounce position is the next frame's record
        rec = frames[f + 1]
        r = math.hypot(rec.x - CIRCLE_CENTER_X, rec.y - CIRCLE_CENTER_Y)
        print(f"  {n:>4}  {f:>6}  {f / FPS:>8.3f}  {rec.x:>8.1f}  {rec.y:>8.1f}  {r:>7.1f}")


if __name__ == "__main__":
    main()
