# Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from postsync.ports.clock import ClockPort
from postsync.ports.remote import RemotePostServicePort, RemoteServiceFactoryPort
from postsync.ports.store import PostStoreContextPort, PostStorePort

__all__ = [
    "ClockPort",
    "PostStoreContextPort",
    "PostStorePort",
    "RemotePostServicePort",
    "RemoteServiceFactoryPort",
]
