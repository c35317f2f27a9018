from __future__ import annotations

from increase.resource import Endpoint, Resource


class Events(Resource):
    RESOURCE_TYPE = "events"

    # List Events
    list = Endpoint.list()
    # Retrieve an Event
    retrieve = Endpoint.retrieve()
