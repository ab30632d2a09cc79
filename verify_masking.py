#!/usr/bin/env python3
"""Span Masking Verification Script.

Static code analysis verification (no imports required).
"""

import re
from pathlib import Path

EXPECTED_RULE_ORDER = [
    "EMAIL",
    "USER_ID",
    "PHONE",
    "PAYMENT_CARD",
    "IP_ADDRESS",
    "SECRET_BLANKET",
]


def print_header(text: str):
    print(f"\n{'='*70}")
    print(f"  {text}")
    print(f"{'='*70}")


def print_success(text: str):
    print(f"  ✅ {text}")


def print_warning(text: str):
    print(f"  ⚠️  {text}")


def verify_rule_order():
    """Verify key rules are declared in precedence order."""
    print_header("Test 1: Key Rule Precedence")

    classifier_py = Path("span_masking/domain/classifier.py").read_text()
    declared = re.findall(r"MaskingRule\(Category\.(\w+),", classifier_py)

    if declared == EXPECTED_RULE_ORDER:
        print_success(f"Rules declared in order: {', '.join(declared)}")
        return True

    print_warning(f"Unexpected rule order: {declared}")
    return False


def verify_processor_installed():
    """Verify tracing setup wraps the delegate with the masking processor."""
    print_header("Test 2: Masking Processor Installed")

    tracing_py = Path("span_masking/observability/tracing.py").read_text()

    if "MaskingSpanProcessor(processor)" in tracing_py:
        print_success("MaskingSpanProcessor wraps the delegate processor")
    else:
        print_warning("MaskingSpanProcessor not installed in setup_tracing")
        return False

    if "OTEL_EXPORTER_OTLP_ENDPOINT" in tracing_py:
        print_success("Tracing fail-closed check found")
    else:
        print_warning("Tracing fail-closed check missing")
        return False

    return True


def verify_no_logging_in_masking_path():
    """Verify the masking path never logs attribute values."""
    print_header("Test 3: No Logging In Masking Path")

    ok = True
    for path in [
        "span_masking/domain/classifier.py",
        "span_masking/domain/maskers.py",
        "span_masking/domain/attributes.py",
        "span_masking/observability/processor.py",
    ]:
        source = Path(path).read_text()
        if "logger." in source or "logging." in source or "print(" in source:
            print_warning(f"{path} logs or prints")
            ok = False
        else:
            print_success(f"{path} is silent")
    return ok


def main():
    print_header("Span Masking Verification")
    print("")
    print("  Static code analysis (no imports required)...")
    print("")

    results = []

    try:
        results.append(("Rule Precedence", verify_rule_order()))
        results.append(("Processor Installed", verify_processor_installed()))
        results.append(("Silent Masking Path", verify_no_logging_in_masking_path()))
    except Exception as e:
        print(f"\n❌ Verification failed with error: {e}")
        import traceback
        traceback.print_exc()
        return False

    # Summary
    print_header("Verification Summary")
    print("")

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✅ PASS" if result else "❌ FAIL"
        print(f"  {status}: {name}")

    print("")
    print(f"  Total: {passed}/{total} checks passed")
    print("")

    if passed == total:
        print_success("All span masking verifications passed!")
        return True
    else:
        print_warning(f"{total - passed} checks failed")
        return False


if __name__ == "__main__":
    import sys
    success = main()
    sys.exit(0 if success else 1)
