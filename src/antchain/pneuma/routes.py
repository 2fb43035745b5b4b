"""
Fixed gateway routes and remote method names.

Routes are protocol constants, not configuration: the endpoint supplies
scheme and host, the route supplies the path.
"""

from __future__ import annotations

import enum


class Route(str, enum.Enum):
    SHAKE_HAND = "/api/contract/shakeHand"
    CHAIN_CALL = "/api/contract/chainCall"
    CHAIN_CALL_FOR_BIZ = "/api/contract/chainCallForBiz"

    def url(self, endpoint: str) -> str:
        return endpoint.rstrip("/") + self.value


class Method(str, enum.Enum):
    # chainCallForBiz
    CREATE_ACCOUNT = "TENANTCREATEACCUNT"  # sic, gateway spelling
    DEPOSIT = "DEPOSIT"
    DEPLOY_CONTRACT = "DEPLOYCONTRACTFORBIZ"
    CALL_CONTRACT_ASYNC = "CALLCONTRACTBIZASYNC"

    # chainCall
    QUERY_TRANSACTION = "QUERYTRANSACTION"
    QUERY_RECEIPT = "QUERYRECEIPT"
    QUERY_BLOCK = "QUERYBLOCK"
    QUERY_BLOCK_BODY = "QUERYBLOCKBODY"
    QUERY_LAST_BLOCK = "QUERYLASTBLOCK"
    QUERY_ACCOUNT = "QUERYACCOUNT"
