# installer/registry.py
# -*- coding: utf-8 -*-
"""
Component registry for the Paperless-ngx installer.

Every component package registers its class with @ComponentRegistry.register,
declaring the components it depends on. The registry checks those
declarations, orders requested components so that dependencies run first,
and validates the fixed 'full' pipeline against them.
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Type

from installer import config as static_config
from installer.base_component import BaseComponent

COMPONENT_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


class ComponentRegistry:
    """Registered component classes, keyed by component name."""

    _registry: Dict[str, Type["BaseComponent"]] = {}

    @classmethod
    def register(cls, name: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Class decorator that registers a component under name.

        metadata may carry "dependencies" (component names that must run
        first) and "description" (shown by 'list' and in the run log).

        Raises:
            ValueError: The name is taken or malformed, or the component
                depends on itself.
        """
        if not COMPONENT_NAME_PATTERN.match(name):
            raise ValueError(
                f"Invalid component name '{name}': use lowercase letters, digits and '_'"
            )
        metadata = dict(metadata or {})
        dependencies = list(dict.fromkeys(metadata.get("dependencies", [])))
        if name in dependencies:
            raise ValueError(f"Component '{name}' cannot depend on itself")
        metadata["dependencies"] = dependencies
        metadata.setdefault("description", "")

        def decorator(
            component_class: Type["BaseComponent"],
        ) -> Type["BaseComponent"]:
            if name in cls._registry:
                raise ValueError(
                    f"Component with name '{name}' already registered"
                )
            component_class.metadata = metadata
            component_class.component_name = name
            cls._registry[name] = component_class
            return component_class

        return decorator

    @classmethod
    def get_component(cls, name: str) -> Type["BaseComponent"]:
        """
        Raises:
            KeyError: If no component with the given name is registered.
        """
        try:
            return cls._registry[name]
        except KeyError:
            raise KeyError(f"No component registered with name '{name}'") from None

    @classmethod
    def get_all_components(cls) -> Dict[str, Type["BaseComponent"]]:
        return cls._registry.copy()

    @classmethod
    def get_component_dependencies(cls, name: str) -> List[str]:
        """Declared dependencies of a registered component, in declared order."""
        metadata = getattr(cls.get_component(name), "metadata", {})
        return list(metadata.get("dependencies", []))

    @classmethod
    def missing_dependencies(cls) -> Dict[str, List[str]]:
        """Map each registered component to the dependencies nobody registered."""
        missing = {}
        for name in sorted(cls._registry):
            unknown = [
                dependency
                for dependency in cls.get_component_dependencies(name)
                if dependency not in cls._registry
            ]
            if unknown:
                missing[name] = unknown
        return missing

    @classmethod
    def check_dependencies(cls) -> None:
        """
        Raises:
            ValueError: A registered component depends on an unregistered one.
        """
        missing = cls.missing_dependencies()
        if missing:
            details = "; ".join(
                f"{name} needs {', '.join(unknown)}" for name, unknown in missing.items()
            )
            raise ValueError(f"Unregistered component dependencies: {details}")

    @classmethod
    def resolve_dependencies(
        cls, components: Sequence[str], order: Optional[Sequence[str]] = None
    ) -> List[str]:
        """
        Expand components with everything they depend on.

        Requested components keep their relative order and each dependency is
        placed before the first component that needs it. Sibling dependencies
        are visited in their position in order when given, alphabetically
        otherwise, so the result is the same on every run.

        Raises:
            KeyError: A component or dependency is not registered.
            ValueError: The dependencies form a cycle.
        """
        rank = {name: position for position, name in enumerate(order or [])}

        def sort_key(name: str):
            return (rank.get(name, len(rank)), name)

        result: List[str] = []
        done = set()
        path: List[str] = []

        def visit(component: str) -> None:
            if component in done:
                return
            if component in path:
                cycle = path[path.index(component):] + [component]
                raise ValueError(f"Circular dependency: {' -> '.join(cycle)}")
            path.append(component)
            for dependency in sorted(
                cls.get_component_dependencies(component), key=sort_key
            ):
                visit(dependency)
            path.pop()
            done.add(component)
            result.append(component)

        for component in components:
            visit(component)
        return result

    @classmethod
    def resolve_group(cls, group: Sequence[str]) -> List[str]:
        """
        Validate a fixed component group and return it in execution order.

        The group must list every dependency of its members and list each one
        before the components that need it; it is run exactly as written.

        Raises:
            KeyError: A member or dependency is not registered.
            ValueError: The group leaves out a dependency or orders one after
                a component that needs it.
        """
        members = list(dict.fromkeys(group))
        resolved = cls.resolve_dependencies(members, order=members)
        outside = [name for name in resolved if name not in members]
        if outside:
            raise ValueError(
                f"Component group is missing dependencies: {', '.join(outside)}"
            )
        position = {name: index for index, name in enumerate(members)}
        for name in members:
            for dependency in cls.get_component_dependencies(name):
                if position[dependency] > position[name]:
                    raise ValueError(
                        f"'{name}' is listed before its dependency '{dependency}'"
                    )
        return members

    @classmethod
    def full_pipeline(cls) -> List[str]:
        """The components run by 'full', in execution order."""
        return cls.resolve_group(static_config.FULL_INSTALL_ORDER)
