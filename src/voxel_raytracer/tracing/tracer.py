"""Recursive Whitted-style ray evaluation over a frozen box scene.

For every hit the tracer sums emission, Lambert diffuse and Phong specular
terms from the primary light plus up to a few emissive boxes, each lighting
term scaled by a hard shadow test, then adds one level of reflection and
refraction.
"""

from typing import Optional

import numpy as np

from ..geometry.box import Intersect
from ..geometry.vectors import normalize, reflect, refract
from ..scene.scene import Scene
from ..shading.light import Light, emissive_lights
from ..utils.config import RenderConfig


class RayTracer:
    """Evaluates rays against a scene.

    The tracer holds no per-ray state; one instance can serve every pixel of
    every frame as long as the scene stays frozen.

    Args:
        scene: Frozen scene to trace against
        config: Render configuration (uses defaults if not provided)

    Example:
        >>> tracer = RayTracer(build_demo_scene())
        >>> color = tracer.cast_ray(np.array([0.0, 10.0, 13.0]),
        ...                         normalize(np.array([0.0, -0.6, -1.0])),
        ...                         sun_light(1.0))
    """

    def __init__(self, scene: Scene, config: Optional[RenderConfig] = None):
        self.scene = scene
        self.config = config or RenderConfig()

    def offset_origin(self, intersect: Intersect, direction: np.ndarray) -> np.ndarray:
        """Start point for a secondary ray leaving ``intersect`` along ``direction``.

        The hit point is pushed below the surface when the ray travels into
        it and above the surface otherwise.
        """
        offset = intersect.normal * self.config.origin_bias
        if np.dot(direction, intersect.normal) < 0.0:
            return intersect.point - offset
        return intersect.point + offset

    def closest_hit(self, origin: np.ndarray, direction: np.ndarray) -> Intersect:
        """Nearest intersection among the hierarchy's candidates."""
        epsilon = self.config.hit_epsilon
        closest = Intersect.empty()
        zbuffer = np.inf
        for box in self.scene.bvh.traverse(origin, direction):
            hit = box.ray_intersect(origin, direction, epsilon)
            if hit.is_intersecting and hit.distance < zbuffer:
                zbuffer = hit.distance
                closest = hit
        return closest

    def cast_shadow(self, intersect: Intersect, light: Light) -> float:
        """Attenuation of ``light`` at the hit point: 0.0 or the shadow factor.

        Any box hit strictly closer than the light blocks it. Blocked lights
        are only partially attenuated, so shadows stay translucent.
        """
        light_direction = normalize(light.position - intersect.point)
        origin = self.offset_origin(intersect, light_direction)
        light_distance = float(np.linalg.norm(light.position - origin))
        epsilon = self.config.hit_epsilon

        for box in self.scene.bvh.traverse(origin, light_direction):
            hit = box.ray_intersect(origin, light_direction, epsilon)
            if hit.is_intersecting and hit.distance < light_distance:
                return self.config.shadow_attenuation
        return 0.0

    def active_lights(self, light: Light, point: np.ndarray) -> list:
        """The primary light followed by lights synthesized from emissive boxes."""
        return [light] + emissive_lights(
            self.scene.emissive,
            point,
            max_lights=self.config.max_emissive_lights,
            min_distance_sq=self.config.min_light_distance_sq,
        )

    def surface_color(self, intersect: Intersect) -> np.ndarray:
        """Texture color at the hit's (u, v), or the flat diffuse color."""
        material = intersect.material
        if material.texture is not None:
            return self.scene.textures.sample(material.texture, intersect.u, intersect.v)
        return np.array(material.diffuse, dtype=np.float64)

    def cast_ray(self, origin: np.ndarray, direction: np.ndarray, light: Light,
                 depth: int = 0) -> np.ndarray:
        """Color seen along a ray.

        Args:
            origin: Ray origin (3,)
            direction: Unit ray direction (3,)
            light: Primary light of the current frame
            depth: Number of reflection/refraction bounces so far

        Returns:
            Unclamped RGB color (3,)
        """
        textures = self.scene.textures
        if depth > self.config.max_depth:
            return textures.sample_skybox(direction)

        intersect = self.closest_hit(origin, direction)
        if not intersect.is_intersecting:
            return textures.sample_skybox(direction)

        material = intersect.material
        normal = intersect.normal
        point = intersect.point
        view_direction = normalize(origin - point)

        total_diffuse = 0.0
        total_specular = np.zeros(3, dtype=np.float64)
        for current in self.active_lights(light, point):
            light_direction = normalize(current.position - point)
            reflection_direction = normalize(reflect(-light_direction, normal))

            shadow = self.cast_shadow(intersect, current)
            intensity = current.intensity * (1.0 - shadow)

            total_diffuse += max(float(np.dot(normal, light_direction)), 0.0) * intensity
            spec = max(float(np.dot(view_direction, reflection_direction)), 0.0) ** material.specular
            total_specular += current.color * (spec * intensity)

        diffuse = self.surface_color(intersect) * total_diffuse

        reflection_color = np.zeros(3, dtype=np.float64)
        if material.reflectivity > 0.0:
            reflect_direction = normalize(reflect(direction, normal))
            reflect_origin = self.offset_origin(intersect, reflect_direction)
            reflection_color = self.cast_ray(reflect_origin, reflect_direction, light, depth + 1)

        refraction_color = np.zeros(3, dtype=np.float64)
        if material.transparency > 0.0:
            refract_direction = refract(direction, normal, material.refractive_index)
            if refract_direction is not None:
                refract_origin = self.offset_origin(intersect, refract_direction)
                refraction_color = self.cast_ray(refract_origin, refract_direction, light, depth + 1)

        return (material.emission
                + diffuse * material.albedo[0]
                + total_specular * material.albedo[1]
                + reflection_color * material.reflectivity
                + refraction_color * material.transparency)
