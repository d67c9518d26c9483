#!/usr/bin/env python
"""CLI entry point for the voxel ray tracer."""

from voxel_raytracer.pipeline import main

if __name__ == "__main__":
    main()
