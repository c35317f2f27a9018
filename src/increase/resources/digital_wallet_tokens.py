from __future__ import annotations

from increase.resource import Endpoint, Resource


class DigitalWalletTokens(Resource):
    NAME = "Digital Wallet Tokens"
    RESOURCE_TYPE = "digital_wallet_tokens"

    list = Endpoint.list()
    retrieve = Endpoint.retrieve()
