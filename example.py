"""Example usage of the contractdiff comparison engine."""

import json
from contractdiff import (
    CompareConfig,
    DiffEngine,
    EngineConfig,
    NumericMode,
    capture_variables,
    config_from_yaml,
)

# Comparison policy, as it would be kept next to the contract tests
policy = config_from_yaml("""
compare_mode: inclusive
numeric_mode: assume_float
ignore_paths:
  - $.id
  - $.createdAt
  - $.lineItems[*].reservationId
ignore_orders:
  - $.tags
""")

# Body documented in the contract
expected_body = {
    "id": "generated",
    "status": "paid",
    "total": 100,
    "createdAt": "2025-02-02T10:30:00Z",
    "tags": ["priority", "b2b"],
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5, "reservationId": "r-1"},
        {"sku": "GADGET-002", "quantity": 2, "reservationId": "r-2"}
    ]
}

# Body returned by the service
actual_body = {
    "id": "INV-8841",  # Generated, ignored
    "status": "paid",
    "total": 100.0,  # Equal under assume_float
    "createdAt": "2025-02-02T10:30:02Z",  # Ignored
    "tags": ["b2b", "priority"],  # Order ignored
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5, "reservationId": "a81f"},
        {"sku": "GADGET-002", "quantity": 2, "reservationId": "c09e"}
    ],
    "links": {"self": "/invoices/INV-8841"}  # Extra field, allowed in inclusive mode
}


def main():
    print("=" * 60)
    print("contractdiff - Example")
    print("=" * 60)

    engine = DiffEngine()
    result = engine.compare(actual_body, expected_body, policy)

    print(f"\nMatch: {result.is_match}")
    print(f"\nExecution:")
    print(f"  Duration: {result.execution.duration_ms}ms")
    print(f"  Engine Version: {result.execution.engine_version}")

    print(f"\nSummary:")
    print(f"  Mismatches: {result.summary.mismatches_found}")
    print(f"  Ignore paths: {result.summary.ignore_paths}")
    print(f"  Ignore orders: {result.summary.ignore_orders}")

    # Values a follow-up request would reuse
    variables = capture_variables(actual_body, {"invoice_id": "$.id", "first_sku": "$.lineItems[0].sku"})
    print(f"\nCaptured: {variables}")


def example_with_mismatch():
    """Example that demonstrates a mismatch under strict comparison."""
    print("\n" + "=" * 60)
    print("Example with Mismatch")
    print("=" * 60)

    strict_policy = (CompareConfig.strict()
                     .with_numeric_mode(NumericMode.STRICT)
                     .ignore_path("$.id"))

    engine = DiffEngine(EngineConfig(max_depth=20))
    result = engine.compare(actual_body, expected_body, strict_policy)

    print(f"\nMatch: {result.is_match}")
    print(f"Mismatches found: {result.summary.mismatches_found}")

    if result.diffs:
        print(f"\nDifferences:")
        for diff in result.diffs:
            print(diff.render())
            print()

    print("-" * 60)
    print("Full JSON Report:")
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
    example_with_mismatch()
