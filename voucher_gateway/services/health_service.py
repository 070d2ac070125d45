"""
Health Service Module
Handles health checks for the gateway and the accounting backend
"""

from typing import Any, Dict

from ..utils.constants import HealthStatus
from ..utils.helpers import get_current_timestamp
from .backend_service import BackendService


class HealthService:
    """Service for health monitoring"""
    
    async def check_all(self, backend: BackendService) -> Dict[str, Any]:
        """Check health of all components"""
        backend_health = await self.check_backend(backend)
        
        return {
            'status': backend_health['status'],
            'timestamp': get_current_timestamp(),
            'components': {
                'gateway': {'status': HealthStatus.HEALTHY, 'message': 'Running'},
                'backend': backend_health
            }
        }
    
    async def check_backend(self, backend: BackendService) -> Dict[str, Any]:
        """Check backend reachability; any HTTP answer below 500 counts as up"""
        result = await backend.ping()
        
        if not result['configured']:
            return {
                'status': HealthStatus.UNHEALTHY,
                'base_url': None,
                'message': result['error']
            }
        
        if not result['reachable']:
            return {
                'status': HealthStatus.UNHEALTHY,
                'base_url': backend.base_url,
                'message': result['error']
            }
        
        status_code = result['status_code']
        return {
            'status': HealthStatus.HEALTHY if status_code < 500 else HealthStatus.DEGRADED,
            'base_url': backend.base_url,
            'status_code': status_code,
            'message': 'Reachable'
        }


# Global service instance
health_service = HealthService()
