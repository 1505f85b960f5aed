"""Exception types raised while configuring, assigning and verifying a circuit.

A failed gate or copy constraint is not an exception: it is reported as a
`ConstraintViolation` record by the verifier. `VerificationError` only exists
for callers that want a satisfied table or nothing (`assert_satisfied`).
"""


class SchemaError(ValueError):
    """Malformed column declaration or reference to an unknown column."""


class AssignmentError(ValueError):
    """Witness assignment cannot produce a complete, well-formed table."""


class VerificationError(Exception):
    """Raised when a table is required to satisfy its constraints but does not."""

    def __init__(self, violations):
        self.violations = list(violations)
        lines = [f"{len(self.violations)} constraint violation(s):"]
        lines.extend(f"  {v}" for v in self.violations)
        super().__init__("\n".join(lines))
