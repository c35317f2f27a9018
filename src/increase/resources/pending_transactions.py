from __future__ import annotations

from increase.resource import Endpoint, Resource


class PendingTransactions(Resource):
    RESOURCE_TYPE = "pending_transactions"

    # List Pending Transactions
    list = Endpoint.list()
    # Retrieve a Pending Transaction
    retrieve = Endpoint.retrieve()
