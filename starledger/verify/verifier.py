# starledger/verify/verifier.py
from typing import List, Optional, Sequence
from dataclasses import dataclass, field

from starledger.core.errors import IntegrityError
from starledger.core.types import Block


@dataclass
class VerificationFailure:
    index: int
    message: str
    category: str = "general"  # "integrity" or "linkage"


@dataclass
class VerificationResult:
    is_valid: bool
    message: str = ""
    failures: List[VerificationFailure] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        """Failure messages in chain order."""
        return [f.message for f in self.failures]

    @property
    def first_failure(self) -> Optional[VerificationFailure]:
        return self.failures[0] if self.failures else None

    def __bool__(self):
        return self.is_valid

    def __str__(self):
        if self.is_valid:
            return "Chain is valid"
        lines = [f"Verification FAILED ({len(self.failures)} issues):"]
        for f in self.failures:
            lines.append(f"  - [{f.index}] {f.category}: {f.message}")
        return "\n".join(lines)


class ChainVerifier:
    """
    Walks a whole chain and collects every defect instead of stopping at the first.
    Linkage is checked against stored hashes, so a tampered body shows up once,
    as an integrity failure on that block alone.
    """

    def verify(self, chain: Sequence[Block]) -> VerificationResult:
        result = VerificationResult(True)

        for i, block in enumerate(chain):
            try:
                block.validate()
            except IntegrityError as e:
                result.failures.append(VerificationFailure(i, str(e), "integrity"))
                result.is_valid = False

            if i > 0 and block.previous_block_hash != chain[i - 1].hash:
                result.failures.append(VerificationFailure(
                    i,
                    f"Block with hash {block.hash} has invalid previous block reference.",
                    "linkage",
                ))
                result.is_valid = False

        result.message = "Valid chain" if result.is_valid else f"Failed with {len(result.failures)} issues"
        return result
