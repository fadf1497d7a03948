# src/pretraffic_gate/handlers/__init__.py
"""
Lambda entrypoints.

- create.handler: POST /books
- get_all.handler: GET /books
- pre_traffic.handler: CodeDeploy hook validating the create function
"""
