from __future__ import annotations

from increase.resource import Endpoint, Resource


class EventSubscriptions(Resource):
    RESOURCE_TYPE = "event_subscriptions"

    # Create an Event Subscription
    create = Endpoint.create()
    # List Event Subscriptions
    list = Endpoint.list()
    # Update an Event Subscription
    update = Endpoint.update()
    # Retrieve an Event Subscription
    retrieve = Endpoint.retrieve()
