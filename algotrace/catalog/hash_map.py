"""Hash-table scenarios: most frequent character of one string."""

from __future__ import annotations

from ..step_types import StructureKind
from ..testing_types import Difficulty, TestCase

HASH_MAP_INPUT = "hello world"
HASH_MAP_EXPECTED = {"char": "l", "count": 3}

FREQUENCY_ASSERTIONS = """\
expect(result["char"]).to_be("l")
expect(result["count"]).to_be(3)
"""

FREQUENCY_SKELETON = '''\
def count_frequency(text):
    counts = create_tracked_hash_map()
    # Count every non-space character, then find the most frequent one.
    return {"char": "", "count": 0}
'''

HASH_MAP_TESTS = [
    TestCase(
        id="hashmap-frequency-easy",
        name="Count Frequency (Easy)",
        difficulty=Difficulty.EASY,
        structure=StructureKind.HASH_MAP,
        description="Return the most frequent non-space character and its count.",
        initial_data=HASH_MAP_INPUT,
        expected_output=HASH_MAP_EXPECTED,
        assertions=FREQUENCY_ASSERTIONS,
        reference_solution='''\
def count_frequency(text):
    counts = {}
    for char in text:
        if char != " ":
            counts[char] = counts.get(char, 0) + 1
    best = max(counts, key=counts.get)
    return {"char": best, "count": counts[best]}
''',
        skeleton_code=FREQUENCY_SKELETON,
        hints=["A plain dict works for counting"],
        acceptance_criteria=["Returns l with a count of 3"],
    ),
    TestCase(
        id="hashmap-frequency-medium",
        name="Count Frequency (Medium)",
        difficulty=Difficulty.MEDIUM,
        structure=StructureKind.HASH_MAP,
        description="Count characters with a tracked hash map to watch each bucket update.",
        initial_data=HASH_MAP_INPUT,
        expected_output=HASH_MAP_EXPECTED,
        assertions=FREQUENCY_ASSERTIONS
        + "expect(len([s for s in steps if s.type == 'set'])).to_be(10)\n",
        reference_solution='''\
def count_frequency(text):
    counts = create_tracked_hash_map()
    for char in text:
        if char != " ":
            counts.set(char, (counts.get(char) or 0) + 1)
    best_char, best_count = "", 0
    for char, count in counts.entries():
        if count > best_count:
            best_char, best_count = char, count
    return {"char": best_char, "count": best_count}
''',
        skeleton_code=FREQUENCY_SKELETON,
        hints=[
            "counts.get(char) returns None for a missing key",
            "counts.entries() lists every (key, value) pair",
        ],
        acceptance_criteria=["Uses set and get on the tracked hash map"],
    ),
    TestCase(
        id="hashmap-frequency-hard",
        name="Count Frequency (Hard)",
        difficulty=Difficulty.HARD,
        structure=StructureKind.HASH_MAP,
        description="Count characters with a tracked hash map and find the maximum by key lookups.",
        initial_data=HASH_MAP_INPUT,
        expected_output=HASH_MAP_EXPECTED,
        assertions=FREQUENCY_ASSERTIONS,
        reference_solution='''\
def count_frequency(text):
    counts = create_tracked_hash_map()
    for char in text:
        if char == " ":
            continue
        if counts.has(char):
            counts.set(char, counts.get(char) + 1)
        else:
            counts.set(char, 1)
    best_char, best_count = "", 0
    for char in counts.keys():
        count = counts.get(char)
        if count > best_count:
            best_char, best_count = char, count
    return {"char": best_char, "count": best_count}
''',
        skeleton_code=FREQUENCY_SKELETON,
        hints=[
            "counts.has(key) checks membership without recording a step",
            "Look each key up again to compare counts",
        ],
        acceptance_criteria=["Returns l with a count of 3"],
    ),
]
