from .envelope import require_field
from .errors import ResolutionError


class StopReference:
    """A raw entry from the ``references.stops`` collection of a response."""

    def __init__(self, stop_id, name, code=None, direction=None):
        self.stop_id = stop_id
        self.name = name
        self.code = code
        self.direction = direction

    @classmethod
    def from_dict(cls, stop_dict):
        return cls(
            stop_id=str(require_field(stop_dict, 'id', 'stop reference')),
            name=require_field(stop_dict, 'name', 'stop reference'),
            code=stop_dict.get('code'),
            direction=stop_dict.get('direction'),
        )

    def with_group(self, group):
        return Stop(self.stop_id, self.name, group, code=self.code, direction=self.direction)

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self):
        return f"StopReference({self.stop_id}, {self.name}, {self.code}, {self.direction})"


class Stop(StopReference):
    """A stop reference with the direction group label it belongs to."""

    def __init__(self, stop_id, name, group, code=None, direction=None):
        super().__init__(stop_id, name, code=code, direction=direction)
        if not group:
            raise ResolutionError(f"Stop {stop_id} needs a non-empty group")
        self.group = group

    def __repr__(self):
        return f"Stop({self.stop_id}, {self.name}, {self.code}, {self.direction}, {self.group})"
