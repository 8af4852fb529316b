"""Immutable view of process-level configuration inputs."""

import os
import sys

from pydantic import BaseModel, ConfigDict, Field

from propstack.stores.models import ReadOnlyMap, empty_map


class ProcessSnapshot(BaseModel):
    """Environment variables and system properties captured at one instant.

    System properties are the interpreter's ``-X name=value`` options.
    Tests construct snapshots directly instead of mutating the real process.
    """

    model_config = ConfigDict(frozen=True)

    environ: ReadOnlyMap = Field(
        default_factory=empty_map, description="Environment variables by name"
    )
    system_properties: ReadOnlyMap = Field(
        default_factory=empty_map, description="System properties by name"
    )

    @classmethod
    def capture(cls) -> "ProcessSnapshot":
        """Snapshot the current process environment and -X options."""
        xoptions = getattr(sys, "_xoptions", {})
        return cls(
            environ=dict(os.environ),
            system_properties={
                name: "true" if value is True else str(value)
                for name, value in xoptions.items()
            },
        )
