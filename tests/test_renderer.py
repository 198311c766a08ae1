"""Tests for Renderer class."""

import pytest
import numpy as np

from prismtrace.vec3 import Vec3, Point3, Color
from prismtrace.camera import Camera
from prismtrace.materials import Material
from prismtrace.shapes import Sphere, Scene
from prismtrace.shading import ShadingOptions, resolve_color, sky_color
from prismtrace.framebuffer import FrameBuffer, to_rgba
from prismtrace.random_source import LFSRRandomSource, SystemRandomSource
from prismtrace.renderer import Renderer, RenderSettings, get_platform_info
from prismtrace.scenes import create_demo_scene, create_default_camera

from conftest import ConstantRandomSource


def small_settings(**kwargs):
    defaults = dict(width=8, height=6, samples_per_pixel=1, max_bounces=4, tile_size=4, num_threads=1)
    defaults.update(kwargs)
    return RenderSettings(**defaults)


class TestRenderSettings:
    """Test RenderSettings configuration."""

    def test_default_values(self):
        settings = RenderSettings()
        assert settings.width == 640
        assert settings.height == 360
        assert settings.samples_per_pixel == 8
        assert settings.max_bounces == 16
        assert settings.shading == ShadingOptions()

    def test_auto_thread_detection(self):
        settings = RenderSettings(num_threads=0)
        import os
        assert settings.num_threads == (os.cpu_count() or 4)

    @pytest.mark.parametrize("kwargs", [
        dict(width=0),
        dict(height=-2),
        dict(samples_per_pixel=0),
        dict(max_bounces=-1),
        dict(tile_size=0),
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)

    def test_zero_bounces_allowed(self):
        assert RenderSettings(max_bounces=0).max_bounces == 0


class TestSamplePixel:
    """Test the per-pixel sampler."""

    def test_single_sample_matches_center_ray(self, zero_rng, small_camera):
        renderer = Renderer(small_settings())
        scene = Scene([Sphere(Point3(0, 0, -2), 0.5, Material.metal(Color(200, 100, 50), 0.0))])

        for x, y in [(0, 0), (4, 3), (7, 5)]:
            expected = resolve_color(small_camera.ray_toward_pixel(x, y), scene, 4, zero_rng)
            assert renderer.sample_pixel(scene, small_camera, x, y, zero_rng) == expected

    def test_jitter_is_random_minus_half(self, small_camera):
        renderer = Renderer(small_settings(samples_per_pixel=2))
        rng = ConstantRandomSource(0.75)
        color = renderer.sample_pixel(Scene(), small_camera, 3, 2, rng)
        expected = sky_color(small_camera.ray_toward_pixel(3, 2, 0.25, 0.25))
        assert color == expected

    def test_independent_jitter_draws_twice(self, small_camera):
        calls = []

        class CountingSource(ConstantRandomSource):
            def random(self):
                calls.append(1)
                return super().random()

        renderer = Renderer(small_settings(samples_per_pixel=3, independent_jitter=True))
        renderer.sample_pixel(Scene(), small_camera, 0, 0, CountingSource(0.5))
        assert len(calls) == 6

    def test_shared_jitter_draws_once(self, small_camera):
        calls = []

        class CountingSource(ConstantRandomSource):
            def random(self):
                calls.append(1)
                return super().random()

        renderer = Renderer(small_settings(samples_per_pixel=3))
        renderer.sample_pixel(Scene(), small_camera, 0, 0, CountingSource(0.5))
        assert len(calls) == 3

    def test_gamma_correction(self, centered_rng, small_camera):
        renderer = Renderer(small_settings(gamma_correct=True))
        sky = sky_color(small_camera.ray_toward_pixel(1, 1))
        expected = tuple(int(np.sqrt(c / 255) * 255) for c in sky)
        assert renderer.pixel_rgba(Scene(), small_camera, 1, 1, centered_rng)[:3] == expected


class TestRender:
    """Test whole-frame rendering."""

    def test_render_produces_framebuffer(self, small_camera):
        renderer = Renderer(small_settings())
        fb = renderer.render(create_demo_scene(), small_camera, rng=LFSRRandomSource(5))
        assert isinstance(fb, FrameBuffer)
        assert fb.pixels.shape == (6, 8, 4)
        assert fb.pixels.dtype == np.uint8
        assert (fb.pixels[:, :, 3] == 255).all()

    def test_render_writes_into_given_buffer(self, small_camera):
        renderer = Renderer(small_settings())
        fb = FrameBuffer(8, 6)
        result = renderer.render(Scene(), small_camera, fb, ConstantRandomSource(0.5))
        assert result is fb
        assert fb.get_pixel(0, 0) != (0, 0, 0, 255)

    def test_buffer_size_mismatch(self, small_camera):
        renderer = Renderer(small_settings())
        with pytest.raises(ValueError):
            renderer.render(Scene(), small_camera, FrameBuffer(4, 4))

    @pytest.mark.parametrize("samples", [1, 2])
    def test_empty_scene_is_sky_gradient(self, samples, centered_rng, small_camera):
        renderer = Renderer(small_settings(samples_per_pixel=samples))
        fb = renderer.render(Scene(), small_camera, rng=centered_rng)

        for y in range(6):
            for x in range(8):
                expected = to_rgba(sky_color(small_camera.ray_toward_pixel(x, y)))
                assert fb.get_pixel(x, y) == expected

    def test_empty_scene_top_is_bluer(self, small_camera):
        renderer = Renderer(small_settings(samples_per_pixel=4))
        fb = renderer.render(Scene(), small_camera, rng=SystemRandomSource(1))
        top_red = int(fb.pixels[0, 4, 0])
        bottom_red = int(fb.pixels[5, 4, 0])
        assert top_red < bottom_red

    def test_black_opaque_sphere_renders_black(self, small_camera):
        renderer = Renderer(small_settings(samples_per_pixel=2))
        scene = Scene([Sphere(Point3(0, 0, -2), 1.0, Material.diffuse(Color(0, 0, 0)))])
        fb = renderer.render(scene, small_camera, rng=SystemRandomSource(3))
        assert fb.get_pixel(4, 3) == (0, 0, 0, 255)

    def test_thread_count_does_not_change_image(self, small_camera):
        scene = create_demo_scene()
        single = Renderer(small_settings(samples_per_pixel=2, num_threads=1))
        threaded = Renderer(small_settings(samples_per_pixel=2, num_threads=4))

        a = single.render(scene, small_camera, rng=LFSRRandomSource(321))
        b = threaded.render(scene, small_camera, rng=LFSRRandomSource(321))

        assert np.array_equal(a.pixels, b.pixels)

    def test_seeded_system_source_is_reproducible(self, small_camera):
        scene = create_demo_scene()
        renderer = Renderer(small_settings(samples_per_pixel=2))
        a = renderer.render(scene, small_camera, rng=SystemRandomSource(9))
        b = renderer.render(scene, small_camera, rng=SystemRandomSource(9))
        assert np.array_equal(a.pixels, b.pixels)

    def test_resized_camera(self):
        renderer = Renderer(small_settings())
        camera = create_default_camera(8, 6).resized(3, 2)
        fb = renderer.render(Scene(), camera, rng=ConstantRandomSource(0.5))
        assert fb.shape == (3, 2)

    def test_create_camera_uses_settings(self):
        renderer = Renderer(small_settings(width=5, height=7))
        camera = renderer.create_camera(focal_length=2.0)
        assert (camera.image_width, camera.image_height) == (5, 7)
        assert camera.focal_length == 2.0


class TestRendererTiles:
    """Test tiling."""

    def test_tiles_cover_frame(self):
        renderer = Renderer(small_settings(tile_size=4))
        tiles = renderer._generate_tiles(10, 6)
        assert tiles[0] == (0, 0, 4, 4)
        assert tiles[-1] == (8, 4, 10, 6)
        covered = sum((x1 - x0) * (y1 - y0) for x0, y0, x1, y1 in tiles)
        assert covered == 60


class TestRendererProgress:
    """Test renderer progress reporting."""

    def test_progress_callback(self, small_camera):
        renderer = Renderer(small_settings(tile_size=4))
        progress_values = []
        renderer.set_progress_callback(progress_values.append)

        renderer.render(Scene(), small_camera, rng=ConstantRandomSource(0.5))

        assert len(progress_values) == 4
        assert progress_values[-1] == 1.0


class TestPlatformInfo:
    """Test platform information."""

    def test_get_platform_info(self):
        info = get_platform_info()
        assert 'system' in info
        assert 'cpu_count' in info
        assert 'numpy_version' in info
