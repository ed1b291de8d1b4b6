"""Catalog of Godot node classes the generated C# can reference directly.

Scene files carry node types as free-form strings. When emitting accessors,
a type outside this catalog (or empty) falls back to the generic default so
the generated code still compiles against GodotSharp.
"""
from __future__ import annotations

from collections.abc import Iterable

from .config import cfg

GODOT_NODE_TYPES: frozenset[str] = frozenset({
    # Core
    "Node", "CanvasItem", "CanvasLayer", "Viewport", "SubViewport", "Window",
    "AcceptDialog", "ConfirmationDialog", "FileDialog", "Popup", "PopupMenu", "PopupPanel",
    "Timer", "HTTPRequest", "ResourcePreloader", "MultiplayerSpawner", "MultiplayerSynchronizer",
    "AnimationPlayer", "AnimationTree", "AnimationMixer", "Tween", "WorldEnvironment",
    "AudioStreamPlayer", "ShaderGlobalsOverride", "StatusIndicator", "InstancePlaceholder",
    "MissingNode", "NavigationAgent2D", "NavigationAgent3D", "SkeletonIK3D",
    # 2D
    "Node2D", "Sprite2D", "AnimatedSprite2D", "Camera2D", "CharacterBody2D", "RigidBody2D",
    "StaticBody2D", "AnimatableBody2D", "Area2D", "CollisionShape2D", "CollisionPolygon2D",
    "Marker2D", "Path2D", "PathFollow2D", "Line2D", "Polygon2D", "MeshInstance2D",
    "MultiMeshInstance2D", "TileMap", "TileMapLayer", "Parallax2D", "ParallaxBackground",
    "ParallaxLayer", "PointLight2D", "DirectionalLight2D", "LightOccluder2D",
    "CanvasModulate", "CanvasGroup", "BackBufferCopy", "GPUParticles2D", "CPUParticles2D",
    "RayCast2D", "ShapeCast2D", "RemoteTransform2D", "Skeleton2D", "Bone2D",
    "PhysicalBone2D", "VisibleOnScreenNotifier2D", "VisibleOnScreenEnabler2D",
    "AudioStreamPlayer2D", "AudioListener2D", "NavigationRegion2D", "NavigationLink2D",
    "NavigationObstacle2D", "DampedSpringJoint2D", "GrooveJoint2D", "PinJoint2D",
    "TouchScreenButton", "CollisionObject2D", "PhysicsBody2D", "Joint2D",
    # 3D
    "Node3D", "Camera3D", "CharacterBody3D", "RigidBody3D", "StaticBody3D",
    "AnimatableBody3D", "Area3D", "CollisionShape3D", "CollisionPolygon3D", "Marker3D",
    "MeshInstance3D", "MultiMeshInstance3D", "CSGBox3D", "CSGSphere3D", "CSGCylinder3D",
    "CSGMesh3D", "CSGPolygon3D", "CSGTorus3D", "CSGCombiner3D", "Sprite3D",
    "AnimatedSprite3D", "Label3D", "Decal", "DirectionalLight3D", "OmniLight3D",
    "SpotLight3D", "LightmapGI", "VoxelGI", "ReflectionProbe", "FogVolume",
    "GPUParticles3D", "CPUParticles3D", "GPUParticlesCollisionBox3D",
    "GPUParticlesAttractorSphere3D", "RayCast3D", "ShapeCast3D", "SpringArm3D",
    "RemoteTransform3D", "Skeleton3D", "BoneAttachment3D", "PhysicalBone3D",
    "Path3D", "PathFollow3D", "GridMap", "VehicleBody3D", "VehicleWheel3D",
    "SoftBody3D", "VisibleOnScreenNotifier3D", "VisibleOnScreenEnabler3D",
    "AudioStreamPlayer3D", "AudioListener3D", "NavigationRegion3D", "NavigationLink3D",
    "NavigationObstacle3D", "OccluderInstance3D", "XROrigin3D", "XRCamera3D",
    "XRController3D", "XRAnchor3D", "HingeJoint3D", "PinJoint3D", "SliderJoint3D",
    "ConeTwistJoint3D", "Generic6DOFJoint3D", "CollisionObject3D", "PhysicsBody3D",
    "VisualInstance3D", "GeometryInstance3D", "Light3D", "Joint3D",
    # UI
    "Control", "Container", "BoxContainer", "HBoxContainer", "VBoxContainer",
    "GridContainer", "FlowContainer", "HFlowContainer", "VFlowContainer",
    "CenterContainer", "MarginContainer", "PanelContainer", "ScrollContainer",
    "SplitContainer", "HSplitContainer", "VSplitContainer", "TabContainer",
    "AspectRatioContainer", "SubViewportContainer", "GraphEdit", "GraphNode",
    "Panel", "Label", "RichTextLabel", "Button", "CheckBox", "CheckButton",
    "LinkButton", "MenuButton", "OptionButton", "ColorPickerButton", "TextureButton",
    "BaseButton", "LineEdit", "TextEdit", "CodeEdit", "SpinBox", "HSlider", "VSlider",
    "Slider", "HScrollBar", "VScrollBar", "ScrollBar", "ProgressBar", "TextureProgressBar",
    "Range", "TextureRect", "ColorRect", "NinePatchRect", "ReferenceRect",
    "ItemList", "Tree", "TabBar", "MenuBar", "ColorPicker", "VideoStreamPlayer",
    "HSeparator", "VSeparator", "Separator",
})


def known_node_types(extra: Iterable[str] | None = None) -> frozenset[str]:
    """Built-in catalog plus configured and caller-supplied custom types."""
    types = GODOT_NODE_TYPES | cfg.extra_node_types
    if extra:
        types = types | frozenset(extra)
    return types


def resolve_node_type(
    declared: str | None,
    *,
    known: frozenset[str] | None = None,
    default: str | None = None,
) -> str:
    """Map a declared type string onto a type the generated code can use."""
    default = default or cfg.default_node_type
    known = known if known is not None else known_node_types()
    declared = (declared or "").strip()
    if declared and declared in known:
        return declared
    return default
