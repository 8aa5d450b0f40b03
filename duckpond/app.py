"""The pond application: sky box, rippling water and a wandering duck."""

from __future__ import annotations

import argparse
import math
import os

import numpy as np

from duckpond.camera import Camera, perspective
from duckpond.models import DuckMotion, cube_mesh, load_duck_mesh
from duckpond.shaders import ShaderBuilder, ShaderType
from duckpond.water import WaterSurface, square_mesh

WIDTH = 800
HEIGHT = 600
CUBE_FACES = ("posx.jpg", "negx.jpg", "posy.jpg", "negy.jpg", "posz.jpg", "negz.jpg")


def cubemap_faces(resource_dir: str) -> list[str]:
    """Paths of the six sky box images in cube map face order."""
    return [os.path.join(resource_dir, "textures", "cubeTextures", name) for name in CUBE_FACES]


def _gl_string(gl, name: int) -> str:
    """Read a zero-terminated string reported by glGetString."""
    pointer = gl.glGetString(name)
    if not pointer:
        return ""
    chars = bytearray()
    index = 0
    while pointer[index]:
        chars.append(pointer[index])
        index += 1
    return chars.decode(errors="replace")


class App:
    """Window, scene objects and the frame loop."""

    def __init__(self, resource_dir: str = "resources") -> None:
        import pyglet
        from pyglet import gl

        from duckpond.gl import Renderer, Shader
        from duckpond.textures import load_cubemap, load_texture

        self._gl = gl
        self._pyglet = pyglet
        try:
            config = gl.Config(double_buffer=True, depth_size=24, major_version=4, minor_version=1)
            self.window = pyglet.window.Window(WIDTH, HEIGHT, "Hello World", config=config)
        except pyglet.window.NoSuchConfigException:
            self.window = pyglet.window.Window(WIDTH, HEIGHT, "Hello World")

        print(f"OpenGL Version: {_gl_string(gl, gl.GL_VERSION)}")
        print(f"GLSL Version: {_gl_string(gl, gl.GL_SHADING_LANGUAGE_VERSION)}")
        gl.glClearColor(0.2, 0.6, 0.9, 1.0)
        gl.glEnable(gl.GL_CULL_FACE)
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glDepthFunc(gl.GL_LESS)

        self.projection = perspective(math.radians(45.0), WIDTH / HEIGHT, 0.1, 200.0)
        self.camera = Camera()

        self.cube_texture = load_cubemap(cubemap_faces(resource_dir))
        self.cube = Renderer(cube_mesh().vertex_format)
        self.cube.assign_mesh(cube_mesh())

        self.water = WaterSurface()
        mesh = square_mesh()
        self.square = Renderer(mesh.vertex_format)
        self.square.assign_mesh(mesh)
        handle = gl.GLuint(0)
        gl.glGenTextures(1, handle)
        self.height_texture = handle.value
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.height_texture)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)

        self.duck_texture = load_texture(os.path.join(resource_dir, "textures", "ducktex.jpg"))
        duck_mesh = load_duck_mesh(os.path.join(resource_dir, "models", "duck.txt"))
        self.duck = Renderer(duck_mesh.vertex_format)
        self.duck.assign_mesh(duck_mesh)
        self.duck_motion = DuckMotion()

        shader_dir = os.path.join(resource_dir, "shaders") + os.sep
        self.shaders = {
            name: Shader.from_builder(
                ShaderBuilder(shader_dir)
                .add_shader(ShaderType.VERTEX, name)
                .add_shader(ShaderType.FRAGMENT, name)
            )
            for name in ("cube", "water", "duck")
        }

        self.window.push_handlers(on_draw=self.render, on_mouse_drag=self._on_mouse_drag)

    def _on_mouse_drag(self, x, y, dx, dy, buttons, modifiers) -> None:
        mouse = self._pyglet.window.mouse
        # Window y grows upwards; drags are measured with y growing downwards.
        if buttons & mouse.RIGHT:
            self.camera.zoom(-dy)
        if buttons & mouse.LEFT:
            self.camera.rotate(dx, -dy)

    def update(self, dt: float) -> None:
        """Advance the water and the duck by dt seconds."""
        gl = self._gl
        self.water.make_rain()
        self.water.step(dt)
        self.duck_motion.update(dt, self.water)
        normals = np.ascontiguousarray(self.water.normal_map(), dtype=np.uint8)
        size = self.water.size
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.height_texture)
        gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
        gl.glTexImage2D(
            gl.GL_TEXTURE_2D, 0, gl.GL_RGBA8, size, size, 0, gl.GL_RGBA,
            gl.GL_UNSIGNED_BYTE, normals.tobytes(),
        )

    def render(self) -> None:
        gl = self._gl
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        view = self.camera.view_matrix()

        shader = self.shaders["cube"]
        shader.bind()
        shader.set_mat4("u_projectionMatrix", self.projection)
        shader.set_mat4("u_viewMatrix", view)
        gl.glDepthMask(gl.GL_FALSE)
        gl.glCullFace(gl.GL_FRONT)
        gl.glFrontFace(gl.GL_CW)
        gl.glBindTexture(gl.GL_TEXTURE_CUBE_MAP, self.cube_texture)
        self.cube.render()
        gl.glDepthMask(gl.GL_TRUE)

        shader = self.shaders["water"]
        shader.bind()
        shader.set_mat4("u_projectionMatrix", self.projection)
        shader.set_mat4("u_viewMatrix", view)
        shader.set_int("u_Texture", 0)
        shader.set_int("u_Texture2", 1)
        shader.set_vec3("viewPos", self.camera.position)
        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.height_texture)
        gl.glActiveTexture(gl.GL_TEXTURE1)
        gl.glBindTexture(gl.GL_TEXTURE_CUBE_MAP, self.cube_texture)
        self.square.render()

        shader = self.shaders["duck"]
        shader.bind()
        shader.set_mat4("u_projectionMatrix", self.projection)
        shader.set_mat4("u_viewMatrix", view)
        shader.set_int("u_Texture", 0)
        shader.set_mat4("u_modelMatrix", self.duck_motion.model_matrix())
        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.duck_texture)
        self.duck.render()

    def run(self) -> None:
        """Run the frame loop until the window closes."""
        self._pyglet.clock.schedule(self.update)
        try:
            self._pyglet.app.run()
        finally:
            self._pyglet.clock.unschedule(self.update)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="duckpond", description="A duck on a rippling pond.")
    parser.add_argument("--resources", default="resources", help="resource directory")
    args = parser.parse_args(argv)
    App(args.resources).run()
    return 0