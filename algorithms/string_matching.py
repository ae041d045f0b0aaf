"""
string_matching.py — Brute-Force String Matching
=================================================
Slides the pattern across the text one alignment at a time and stops at
the FIRST full match (naive scan semantics, not all matches).

Yields:
  1. COMPARE (i+j, j) for every character checked at alignment i
  2. SHIFT (i, i+1) on a mismatch – the pattern moves one place right
  3. ACCEPT (i) when all m characters match
  4. NOT_FOUND once every alignment 0 .. n-m has failed
"""

from typing import Generator, List

from algorithms.step import Step, StepBuilder, StepKind


PSEUDOCODE: List[str] = [
    "def brute_force(text, pattern):",               # 0
    "    for i in 0 .. n-m:",                        # 1
    "        for j in 0 .. m-1:",                    # 2
    "            if text[i+j] != pattern[j]:",       # 3
    "                shift pattern; break",          # 4
    "        if j == m: return i",                   # 5
    "    return NOT FOUND",                          # 6
]


def brute_force(text: str, pattern: str) -> Generator[Step, None, None]:
    n, m      = len(text), len(pattern)
    alignment = 0
    sb        = StepBuilder(lambda: {"text": text, "pattern": pattern, "alignment": alignment})

    for i in range(n - m + 1):
        alignment = i
        matched = True
        for j in range(m):
            t_char, p_char = text[i + j], pattern[j]
            yield sb.build(
                StepKind.COMPARE, (i + j, j),
                f"Comparing Text['{t_char}'] against Pattern['{p_char}']...",
                pseudocode_line=3, chars=(t_char, p_char),
            )
            if t_char != p_char:
                matched = False
                yield sb.build(
                    StepKind.SHIFT, (i, i + 1),
                    f"Mismatch at index {i + j}. Shifting pattern.",
                    pseudocode_line=4, chars=(t_char, p_char),
                )
                break

        if matched:
            yield sb.build(
                StepKind.ACCEPT, (i,),
                f"Pattern fully matched starting at index {i}!",
                pseudocode_line=5,
            )
            return

    yield sb.build(StepKind.NOT_FOUND, (pattern,), "Reached end. Pattern not found in Text.", pseudocode_line=6)
