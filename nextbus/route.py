from .envelope import require_field


class Agency:
    def __init__(self, agency_id, name):
        self.agency_id = agency_id
        self.name = name

    @classmethod
    def from_dict(cls, agency_dict):
        return cls(
            agency_id=str(require_field(agency_dict, 'id', 'agency')),
            name=require_field(agency_dict, 'name', 'agency'),
        )

    def __eq__(self, other):
        return isinstance(other, Agency) and vars(self) == vars(other)

    def __repr__(self):
        return f"Agency({self.agency_id}, {self.name})"


class Route:
    def __init__(self, route_id, short_name, agency_id=None):
        self.route_id = route_id
        self.short_name = short_name
        self.agency_id = agency_id

    @classmethod
    def from_dict(cls, route_dict):
        # Some routes only carry a longName; they can never match a short name lookup
        return cls(
            route_id=str(require_field(route_dict, 'id', 'route')),
            short_name=route_dict.get('shortName') or '',
            agency_id=route_dict.get('agencyId'),
        )

    def __eq__(self, other):
        return isinstance(other, Route) and vars(self) == vars(other)

    def __repr__(self):
        return f"Route({self.route_id}, {self.short_name})"
