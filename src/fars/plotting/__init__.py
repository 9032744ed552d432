"""State accident maps."""

from fars.plotting.state_map import map_state

__all__ = ["map_state"]
