"""
Service context for log lines.

Identifies which process of which deployment wrote a line, so that logs from
several workers behind one load balancer can be told apart.
"""

from functools import lru_cache
import os


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'box-office')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    instance = os.getenv('HOSTNAME') or str(os.getpid())
    return f'{service_name}@{deploy_env}:{instance}'
