"""
Theurgy - Command implementations for the AntChain CLI.

Each module groups related top-level commands:
- business: create-account, deposit (chainCallForBiz)
- contract: deploy, call (chainCallForBiz)
- query:    tx, receipt, block-header, block-body, last-block, account (chainCall)
"""
