"""Scene module for scene construction and loading.

Components:
    manager: Scene container, validation and JSON serialization
    reference: The six-sphere reference scene
"""

from .manager import Scene, SceneConfig, load_scene, save_scene
from .reference import ReferenceSceneParams, create_reference_scene

__all__ = [
    "Scene",
    "SceneConfig",
    "load_scene",
    "save_scene",
    "ReferenceSceneParams",
    "create_reference_scene",
]
