#!/usr/bin/env python3
"""
prismtrace - A recursive ray tracer for sphere scenes

Main entry point for rendering the sample scene to an image file.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from prismtrace.framebuffer import FrameBuffer
from prismtrace.patterns import draw_noise, draw_rainbow_rectangle
from prismtrace.random_source import create_random_source
from prismtrace.renderer import Renderer, RenderSettings, get_platform_info
from prismtrace.scenes import create_demo_scene, create_default_camera
from prismtrace.shading import ShadingOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='prismtrace - A recursive ray tracer for sphere scenes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output render.png
  python main.py --width 1280 --height 720 --samples 128 --output hd_render.png
  python main.py --rng lfsr --seed 44257 --samples 4 --output lfsr.png
  python main.py --mode gradient --output gradient.png
        '''
    )

    parser.add_argument('--width', type=int, default=640, help='Image width (default: 640)')
    parser.add_argument('--height', type=int, default=360, help='Image height (default: 360)')
    parser.add_argument('--samples', type=int, default=8, help='Samples per pixel (default: 8)')
    parser.add_argument('--bounces', type=int, default=16, help='Max ray bounces (default: 16)')
    parser.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    parser.add_argument('--tile-size', type=int, default=32, help='Tile edge in pixels (default: 32)')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--mode', type=str, default='raytrace', choices=['raytrace', 'noise', 'gradient'],
                        help='What to draw (default: raytrace)')
    parser.add_argument('--rng', type=str, default='system', choices=['system', 'lfsr'],
                        help='Random source (default: system)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--corrected-composition', action='store_true',
                        help='Do not rescale composed colors by reflectivity + transparency')
    parser.add_argument('--physical-refraction', action='store_true',
                        help='Refract with total internal reflection instead of the clamped formula')
    parser.add_argument('--normals', action='store_true', help='Shade by surface normal')
    parser.add_argument('--gamma', action='store_true', help='Apply gamma correction')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--info', action='store_true', help='Show platform info and exit')
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    if args.info:
        info = get_platform_info()
        print("prismtrace Platform Info:")
        print(f"  System: {info['system']}")
        print(f"  Machine: {info['machine']}")
        print(f"  Processor: {info['processor']}")
        print(f"  Python: {info['python_version']}")
        print(f"  NumPy: {info['numpy_version']}")
        print(f"  CPU Cores: {info['cpu_count']}")
        return 0

    try:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_bounces=args.bounces,
            tile_size=args.tile_size,
            num_threads=args.threads,
            gamma_correct=args.gamma,
            shading=ShadingOptions(
                legacy_composition=not args.corrected_composition,
                physical_refraction=args.physical_refraction,
                shade_normals=args.normals
            )
        )
        rng = create_random_source(args.rng, args.seed)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print("=" * 60)
    print("prismtrace")
    print("=" * 60)

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Mode: {args.mode}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Bounces: {settings.max_bounces}")
    print(f"  Threads: {settings.num_threads}")
    print(f"  Random source: {args.rng}")

    framebuffer = FrameBuffer(settings.width, settings.height)

    start_time = time.time()
    if args.mode == 'noise':
        draw_noise(framebuffer, rng)
    elif args.mode == 'gradient':
        draw_rainbow_rectangle(framebuffer)
    else:
        scene = create_demo_scene()
        camera = create_default_camera(settings.width, settings.height)
        print(f"  Objects in scene: {len(scene)}")

        renderer = Renderer(settings)

        last_progress = [0]

        def progress_callback(progress: float):
            pct = int(progress * 100)
            if pct > last_progress[0]:
                last_progress[0] = pct
                bar_len = 40
                filled = int(bar_len * progress)
                bar = '█' * filled + '░' * (bar_len - filled)
                print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

        renderer.set_progress_callback(progress_callback)

        print("\nRendering...")
        renderer.render(scene, camera, framebuffer, rng)

    elapsed = time.time() - start_time
    print(f"\nRender took {elapsed * 1000:.0f}ms")
    if args.mode == 'raytrace' and elapsed > 0:
        rays = settings.width * settings.height * settings.samples_per_pixel
        print(f"  Primary rays per second: {rays / elapsed:.0f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    try:
        framebuffer.save(output_path)
    except (OSError, ValueError) as e:
        print(f"Error: could not save image: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
