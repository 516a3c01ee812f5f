"""Topology catalogue: operational profile of each replication topology.

Each profile defines:
  - The replication mode and write policy the topology implies
  - Its read policy (leader-follower distinguishes strong from relaxed reads)
  - A fixed failure-behaviour description and trade-off statements
  - A complexity rank, used to break score ties (simplest topology wins)
"""

from dataclasses import dataclass
from typing import Optional

from internal.models.types import ReadPolicy, ReplicationMode, Topology, WritePolicy


@dataclass(frozen=True)
class TopologyProfile:
    """Immutable operational profile of a topology."""
    topology: Topology
    complexity_rank: int
    replication_mode: ReplicationMode
    write_policy: WritePolicy
    read_policy: ReadPolicy
    strong_read_policy: ReadPolicy
    failure_behaviour: str
    tradeoffs: tuple
    uses_quorum: bool = False
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "topology": self.topology.value,
            "complexityRank": self.complexity_rank,
            "replicationMode": self.replication_mode.value,
            "writePolicy": self.write_policy.value,
            "readPolicy": self.read_policy.value,
            "strongReadPolicy": self.strong_read_policy.value,
            "usesQuorum": self.uses_quorum,
            "failureBehaviour": self.failure_behaviour,
            "tradeoffs": list(self.tradeoffs),
            "description": self.description,
        }


# ── Topology Registry ────────────────────────────────────────────────────────

TOPOLOGIES: dict = {
    Topology.LEADER_FOLLOWER: TopologyProfile(
        topology=Topology.LEADER_FOLLOWER,
        complexity_rank=1,
        replication_mode=ReplicationMode.PRIMARY_BACKUP,
        write_policy=WritePolicy.SINGLE_WRITER,
        read_policy=ReadPolicy.REPLICA_READ_ALLOWED,
        strong_read_policy=ReadPolicy.LEADER_READ,
        failure_behaviour=(
            "Unavailable for writes if the leader is unreachable until failover completes; "
            "replicas keep serving reads."
        ),
        tradeoffs=(
            "All writes go through one leader, so write throughput and write latency are bound to its region.",
            "Replica reads may be stale unless reads are routed to the leader.",
        ),
        description="Single writer with read replicas. No write conflicts by construction.",
    ),
    Topology.MULTI_LEADER: TopologyProfile(
        topology=Topology.MULTI_LEADER,
        complexity_rank=2,
        replication_mode=ReplicationMode.MULTI_PRIMARY,
        write_policy=WritePolicy.MULTI_WRITER,
        read_policy=ReadPolicy.LOCAL_READ,
        strong_read_policy=ReadPolicy.LOCAL_READ,
        failure_behaviour=(
            "Each leader keeps accepting local writes during a partition; divergent writes "
            "are reconciled by conflict resolution once connectivity returns."
        ),
        tradeoffs=(
            "Concurrent writes to the same record in different regions must be resolved (LWW, CRDTs or custom merge).",
            "Replication between leaders is asynchronous, so cross-region reads are eventually consistent.",
        ),
        description="Several leaders accept writes and converge asynchronously.",
    ),
    Topology.LEADERLESS: TopologyProfile(
        topology=Topology.LEADERLESS,
        complexity_rank=3,
        replication_mode=ReplicationMode.QUORUM,
        write_policy=WritePolicy.QUORUM_WRITE,
        read_policy=ReadPolicy.QUORUM_READ,
        strong_read_policy=ReadPolicy.QUORUM_READ,
        failure_behaviour=(
            "Reads and writes succeed while a quorum of replicas is reachable; operations fail "
            "once fewer than W (writes) or R (reads) replicas respond."
        ),
        tradeoffs=(
            "Every operation contacts several replicas, so tail latency follows the slowest replica in the quorum.",
            "Needs read repair or anti-entropy to converge replicas that missed writes.",
        ),
        uses_quorum=True,
        description="No designated leader; clients read and write through R/W quorums.",
    ),
}

# Ascending operational complexity: the tie-break order.
TIE_BREAK_ORDER = tuple(
    sorted(TOPOLOGIES, key=lambda t: TOPOLOGIES[t].complexity_rank)
)


def get_profile(topology) -> Optional[TopologyProfile]:
    """Return the TopologyProfile for a Topology or its name, or None."""
    if isinstance(topology, str) and not isinstance(topology, Topology):
        try:
            topology = Topology(topology.strip().upper())
        except ValueError:
            return None
    return TOPOLOGIES.get(topology)


def list_profiles() -> list:
    """Return all topology profiles in tie-break order."""
    return [TOPOLOGIES[t] for t in TIE_BREAK_ORDER]
