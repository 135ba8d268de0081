"""Sampler adapters implementing SamplerPort."""

from dockwatch.adapters.sampler.docker import DOCKER_STATS_FORMAT, DockerStatsSampler

__all__ = ["DOCKER_STATS_FORMAT", "DockerStatsSampler"]
