from mediascanner.core.models import HashAlgorithmName

ALGORITHM_ALIASES = {
    "sha256": HashAlgorithmName.SHA256,
    "blake2b": HashAlgorithmName.BLAKE2B,
    "xxh128": HashAlgorithmName.XXH128,
    "xxhash": HashAlgorithmName.XXH128,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())


def _algorithm_help_lines():
    lines = []
    for algorithm in HashAlgorithmName:
        names = ", ".join(alias for alias, value in ALGORITHM_ALIASES.items() if value is algorithm)
        lines.append(f"  {names:<14} : {algorithm.description}")
    return lines


ALGORITHM_HELP_TEXT = "\n".join(
    ["Content fingerprint algorithm:"]
    + _algorithm_help_lines()
    + ["Example:", "  %(prog)s -i ~/Pictures --algorithm xxh128"]
)

EPILOG_TEXT = """
Examples:
  Basic usage - find duplicates in Pictures folder
  %(prog)s -i ~/Pictures

  Show the scanned tree instead of duplicate groups
  %(prog)s -i ~/Pictures --tree

  Find duplicates among files whose names contain "img" (case-insensitive)
  %(prog)s -i ~/Pictures -n img

  Save duplicate groups to a report file
  %(prog)s -i ~/Pictures -o duplicates.txt

  Keep one file per duplicate group and move the rest to trash (with confirmation prompt)
  %(prog)s -i ~/Pictures --keep-one

  Same as above but without confirmation, deleting permanently (for scripts)
  %(prog)s -i ~/Pictures --keep-one --force --permanent
"""
