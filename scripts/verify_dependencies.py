#!/usr/bin/env python3
"""
Dependency Verification Script for jsrewire

This script checks that the parser stack is installed, that the JavaScript
grammar loads, and that a small module can be rewired end to end.
"""

import sys
from importlib.metadata import PackageNotFoundError, version


# ANSI color codes for terminal output
class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    BLUE = '\033[94m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


def print_success(message):
    print(f"{Colors.GREEN}✓ {message}{Colors.RESET}")


def print_error(message):
    print(f"{Colors.RED}✗ {message}{Colors.RESET}")


def print_info(message):
    print(f"{Colors.BLUE}ℹ {message}{Colors.RESET}")


def print_header(message):
    print(f"\n{Colors.BOLD}{message}{Colors.RESET}")


def _distribution_version(name):
    try:
        return version(name)
    except PackageNotFoundError:
        return "unknown"


def verify_tree_sitter_javascript():
    """Verify tree-sitter and the JavaScript grammar can parse a module."""
    try:
        import tree_sitter_javascript as tsjs
        from tree_sitter import Language, Parser

        print_success(f"tree-sitter {_distribution_version('tree-sitter')} installed successfully")
        print_success(
            f"tree-sitter-javascript {_distribution_version('tree-sitter-javascript')} "
            "installed successfully"
        )

        test_code = b"export default function foo() { return 1; }"
        tree = Parser(Language(tsjs.language())).parse(test_code)
        if tree.root_node.has_error:
            print_error("  JavaScript grammar failed to parse test module")
            return False
        print_info(f"  Parsed test module: {tree.root_node.named_children[0].type}")

        return True
    except ImportError as e:
        print_error(f"tree-sitter import failed: {e}")
        return False
    except Exception as e:
        print_error(f"tree-sitter functionality test failed: {e}")
        return False


def verify_rewire():
    """Verify the rewire pass runs on a sample module."""
    try:
        from jsrewire import rewire

        code = rewire("import dep from './dep';\nexport let value = dep;")
        if "export function rewire$value(" not in code or "export function restore(" not in code:
            print_error("  Rewired module is missing generated functions")
            return False
        print_success("jsrewire rewired sample module successfully")

        return True
    except ImportError as e:
        print_error(f"jsrewire import failed: {e}")
        return False
    except Exception as e:
        print_error(f"jsrewire functionality test failed: {e}")
        return False


def main():
    """Main verification function."""
    print_header("=" * 60)
    print_header("jsrewire - Dependency Verification")
    print_header("=" * 60)

    print_info(f"Python version: {sys.version}")
    print_info(f"Python executable: {sys.executable}")

    print_header("\nVerifying Core Dependencies:")

    results = [
        ("tree-sitter", verify_tree_sitter_javascript()),
        ("jsrewire", verify_rewire()),
    ]

    print_header("\nVerification Summary:")
    print_header("-" * 60)

    for name, passed in results:
        status = f"{Colors.GREEN}PASS{Colors.RESET}" if passed else f"{Colors.RED}FAIL{Colors.RESET}"
        print(f"  {name:20s} [{status}]")

    print_header("-" * 60)

    if all(passed for _, passed in results):
        print_success("\n✓ All dependencies verified successfully!")
        return 0

    print_error("\n✗ Some dependencies failed verification.")
    print_info("\nTo install missing dependencies, run:")
    print_info("  pip install -e .")
    return 1


if __name__ == "__main__":
    sys.exit(main())
