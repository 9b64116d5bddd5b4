"""Deterministic address and capability derivation.

A puzzle-state record lives at an address derived from a fixed namespace, the
seed id and the owning program id. The same derivation yields a Capability
that lets the program act as the record (e.g. as a mint authority) without
holding a private key: anyone verifying it simply re-derives the address from
the capability's seeds.
"""

import hashlib
from dataclasses import dataclass

SEED_STATE_NAMESPACE = b"seed_state"
DEFAULT_PROGRAM_ID = "GqVqdhyzJquzUzXoogf3GGeHFcoazt3ed4kb4x9aFukh"

_DERIVATION_MARKER = b"ProgramDerivedAddress"


def seed_bytes(seed_id: int) -> bytes:
    """Little-endian u64 encoding of a seed id."""
    return seed_id.to_bytes(8, "little")


def derive_address(signer_seeds: tuple[bytes, ...], program_id: str) -> str:
    """Hash seeds and program id into a hex address.

    Each seed is length-prefixed so distinct seed tuples never collide by
    concatenation.
    """
    digest = hashlib.sha256()
    for seed in signer_seeds:
        digest.update(len(seed).to_bytes(4, "little"))
        digest.update(seed)
    digest.update(program_id.encode("utf-8"))
    digest.update(_DERIVATION_MARKER)
    return digest.hexdigest()


@dataclass(frozen=True)
class Capability:
    """Proof that the holder can reproduce the derivation of ``address``."""

    program_id: str
    signer_seeds: tuple[bytes, ...]
    address: str

    def signer_address(self) -> str:
        """Re-derive the address this capability actually signs for."""
        return derive_address(self.signer_seeds, self.program_id)

    def is_valid(self) -> bool:
        return self.signer_address() == self.address


class ProgramAuthority:
    """Derives puzzle-state addresses and signing capabilities for one program."""

    def __init__(self, program_id: str = DEFAULT_PROGRAM_ID):
        self.program_id = program_id

    def state_address(self, seed_id: int) -> str:
        return derive_address(self._seeds(seed_id), self.program_id)

    def derive(self, seed_id: int) -> tuple[str, Capability]:
        """Return the state address for ``seed_id`` and a capability for it."""
        seeds = self._seeds(seed_id)
        address = derive_address(seeds, self.program_id)
        return address, Capability(
            program_id=self.program_id, signer_seeds=seeds, address=address
        )

    @staticmethod
    def _seeds(seed_id: int) -> tuple[bytes, ...]:
        return (SEED_STATE_NAMESPACE, seed_bytes(seed_id))
