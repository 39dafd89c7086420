"""Service base for the engine's long-lived components.

The lexicon cache, the image normalizer and the writing grader all register
here so a host can ask for the grader's health together with the services
it depends on, and release everything at shutdown.
"""
from typing import Any, Dict, List, Optional

import logging
import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

logger = logging.getLogger(__name__)


class ServiceStatus(Enum):
    """Service status enumeration."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


@dataclass
class ServiceMetrics:
    """Request counters for one engine service."""
    service_name: str
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    average_response_time: float = 0.0
    last_request_time: Optional[datetime] = None
    last_failure_time: Optional[datetime] = None
    status: ServiceStatus = ServiceStatus.UNKNOWN
    custom_metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return (self.successful_requests / self.total_requests) * 100

    def add_custom_metric(self, key: str, value: Any) -> None:
        """Add a custom metric, accumulating when both values are numeric."""
        if (
            key in self.custom_metrics
            and isinstance(self.custom_metrics[key], (int, float))
            and isinstance(value, (int, float))
        ):
            self.custom_metrics[key] += value
        else:
            self.custom_metrics[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service_name": self.service_name,
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "success_rate": self.success_rate,
            "average_response_time": self.average_response_time,
            "last_request_time": self.last_request_time.isoformat() if self.last_request_time else None,
            "last_failure_time": self.last_failure_time.isoformat() if self.last_failure_time else None,
            "status": self.status.value,
            "custom_metrics": self.custom_metrics,
        }


class BaseService(ABC):
    """Base class giving each engine service metrics and registration."""

    def __init__(self, service_name: str, **kwargs):
        """Initialize base service.

        Args:
            service_name: Registry name, e.g. ``lexicon_service``
            **kwargs: Additional service-specific configuration
        """
        self.service_name = service_name
        self.config = kwargs
        self.metrics = ServiceMetrics(service_name=service_name)
        self._lock = threading.RLock()
        self._initialized = False

        ServiceRegistry.register(self)

        logger.info(f"Initialized {self.service_name} service")

    @abstractmethod
    def initialize(self) -> bool:
        """Prepare the service; False when it cannot run at full strength."""

    @abstractmethod
    def health_check(self) -> bool:
        """True when the service is ready to take requests."""

    @abstractmethod
    def cleanup(self) -> None:
        """Release service resources."""

    def get_metrics(self) -> ServiceMetrics:
        with self._lock:
            return self.metrics

    def update_custom_metric(self, key: str, value: Any) -> None:
        with self._lock:
            self.metrics.custom_metrics[key] = value

    def increment_custom_metric(self, key: str, value: int = 1) -> None:
        with self._lock:
            self.metrics.add_custom_metric(key, value)

    @contextmanager
    def track_request(self, operation_name: Optional[str] = None):
        """Count a request, time it and update the service status.

        Exceptions are recorded as failures and re-raised.
        """
        start_time = time.time()
        request_time = datetime.now(timezone.utc)

        try:
            with self._lock:
                self.metrics.total_requests += 1
                self.metrics.last_request_time = request_time
                if operation_name:
                    self.metrics.add_custom_metric(f"operation_{operation_name}", 1)

            yield

            with self._lock:
                self.metrics.successful_requests += 1
                self._update_average_response_time(time.time() - start_time)

                if self.metrics.success_rate >= 95:
                    self.metrics.status = ServiceStatus.HEALTHY
                elif self.metrics.success_rate >= 80:
                    self.metrics.status = ServiceStatus.DEGRADED
                else:
                    self.metrics.status = ServiceStatus.UNHEALTHY

        except Exception as e:
            with self._lock:
                self.metrics.failed_requests += 1
                self.metrics.last_failure_time = request_time
                self._update_average_response_time(time.time() - start_time)

                if self.metrics.success_rate < 80:
                    self.metrics.status = ServiceStatus.UNHEALTHY
                elif self.metrics.success_rate < 95:
                    self.metrics.status = ServiceStatus.DEGRADED

            logger.error(f"Request failed in {self.service_name}: {str(e)}")
            raise

    def _update_average_response_time(self, response_time: float) -> None:
        """Exponential moving average of response times."""
        if self.metrics.average_response_time == 0:
            self.metrics.average_response_time = response_time
        else:
            alpha = 0.1
            self.metrics.average_response_time = (
                alpha * response_time + (1 - alpha) * self.metrics.average_response_time
            )


class ServiceRegistry:
    """Registry of engine services and their dependencies."""

    _services: Dict[str, BaseService] = {}
    _dependencies: Dict[str, List[str]] = {}
    _lock = threading.RLock()

    @classmethod
    def register(cls, service: BaseService) -> None:
        with cls._lock:
            cls._services[service.service_name] = service
            logger.info(f"Registered service: {service.service_name}")

    @classmethod
    def unregister(cls, service_name: str) -> None:
        with cls._lock:
            if service_name in cls._services:
                service = cls._services.pop(service_name)
                try:
                    service.cleanup()
                except Exception as e:
                    logger.error(f"Error during cleanup of {service_name}: {str(e)}")
                logger.info(f"Unregistered service: {service_name}")

    @classmethod
    def get_service(cls, service_name: str) -> Optional[BaseService]:
        with cls._lock:
            return cls._services.get(service_name)

    @classmethod
    def add_dependency(cls, service_name: str, dependency_name: str) -> None:
        """Record that ``service_name`` depends on ``dependency_name``."""
        with cls._lock:
            dependencies = cls._dependencies.setdefault(service_name, [])
            if dependency_name not in dependencies:
                dependencies.append(dependency_name)

    @classmethod
    def get_dependencies(cls, service_name: str) -> List[str]:
        with cls._lock:
            return cls._dependencies.get(service_name, []).copy()

    @classmethod
    def health_report(cls, service_name: str) -> Dict[str, Dict[str, Any]]:
        """Health of a service and of every service it depends on.

        A failing health check is reported as unhealthy rather than raised.
        """
        report = {}
        with cls._lock:
            for name in [service_name] + cls._dependencies.get(service_name, []):
                service = cls.get_service(name)
                if service is None:
                    report[name] = {"healthy": False, "status": ServiceStatus.UNKNOWN.value}
                    continue
                try:
                    is_healthy = service.health_check()
                    metrics = service.get_metrics()
                    report[name] = {
                        "healthy": is_healthy,
                        "status": metrics.status.value,
                        "metrics": metrics.to_dict(),
                    }
                except Exception as e:
                    report[name] = {
                        "healthy": False,
                        "status": ServiceStatus.UNHEALTHY.value,
                        "error": str(e),
                    }
        return report

    @classmethod
    def cleanup_all(cls) -> None:
        """Unregister and clean up every service."""
        with cls._lock:
            for name in list(cls._services.keys()):
                cls.unregister(name)
            cls._dependencies.clear()


class ServiceInjector:
    """Dependency injection for services."""

    @staticmethod
    def inject_dependencies(target_service: BaseService, **dependencies) -> None:
        """Set each dependency as an attribute, recording service dependencies."""
        for name, dependency in dependencies.items():
            setattr(target_service, name, dependency)
            if isinstance(dependency, BaseService):
                ServiceRegistry.add_dependency(target_service.service_name, dependency.service_name)
                logger.debug(f"Injected {dependency.service_name} into {target_service.service_name} as {name}")
            else:
                logger.debug(f"Injected {type(dependency).__name__} into {target_service.service_name} as {name}")
