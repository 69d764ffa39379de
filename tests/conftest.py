"""Pytest configuration and fixtures."""

import logging
from datetime import timedelta

import pytest
import structlog

from services.compressor.compressor import TimeSeriesCompressor
from services.compressor.config import CompressorConfig
from shared.framework.metrics import MetricsCollector
from tests.fixtures.sample_payloads import SamplePayloadGenerator


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any logging setup a test performed."""
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def default_config():
    """Fully-resolved default configuration."""
    return CompressorConfig.default()


@pytest.fixture
def host_config():
    """Configuration grouping CPU samples by host and service."""
    return CompressorConfig(
        timestamp_field='timestamp',
        value_fields=['value'],
        group_by_fields=['host', 'service'],
        aggregation_method='sum',
        time_window=timedelta(minutes=1),
        workers=2,
    )


@pytest.fixture
def compressor(default_config):
    """Compressor built from the defaults."""
    return TimeSeriesCompressor(default_config)


@pytest.fixture
def metrics_collector():
    """Metrics collector with its own registry."""
    return MetricsCollector('test_compressor')


@pytest.fixture
def payload_generator():
    return SamplePayloadGenerator()


@pytest.fixture
def sample_payload(payload_generator):
    """Two minutes of samples from three hosts."""
    return payload_generator.to_payload(payload_generator.generate_metrics(count=120))
