"""
Grading Domain Constants

Dictionaries and word lists used by the text normalizer and both scorers.
Covers the five engineering streams supported by the exam portal
(CSE, EEE, ECE, CIVIL, MECHANICAL).

Note: These are baseline vocabularies. Extend per stream as the question bank grows.
"""

from typing import Dict, Final, FrozenSet, List


# ============================================================================
# CONTRACTIONS - Expanded by literal substring replacement during normalization
# ============================================================================

CONTRACTIONS: Final[Dict[str, str]] = {
    "don't": "do not",
    "won't": "will not",
    "can't": "cannot",
    "isn't": "is not",
    "aren't": "are not",
    "wasn't": "was not",
    "weren't": "were not",
    "hasn't": "has not",
    "haven't": "have not",
    "hadn't": "had not",
    "doesn't": "does not",
    "didn't": "did not",
    "shouldn't": "should not",
    "wouldn't": "would not",
    "couldn't": "could not",
}

# Upper bound on normalized answer length (characters)
MAX_NORMALIZED_LENGTH: Final[int] = 1000


# ============================================================================
# STOP WORDS - Ignored during keyword extraction
# ============================================================================

STOP_WORDS: Final[FrozenSet[str]] = frozenset(
    (
        "a an the and or of to in on for from by with into about over after before "
        "during through is are was were be being been this that these those it its "
        "their his her our your as at if then than so such not no nor also too very "
        "more most can could should would may might must will shall do does did done "
        "have has had having which who whom whose where when why how what there here "
        "they them we you he she all any each both other some only own same just "
        "using uses used provides provide ensures ensure"
    ).split()
)

# Tokens shorter than this are never keywords
MIN_KEYWORD_LENGTH: Final[int] = 3


# ============================================================================
# TECHNICAL VOCABULARY - Per-stream terms for technical-term overlap
# ============================================================================

TECHNICAL_TERMS: Final[Dict[str, List[str]]] = {
    "CSE": [
        "algorithm",
        "array",
        "acknowledgment",
        "bandwidth",
        "binary",
        "cache",
        "compiler",
        "complexity",
        "database",
        "deadlock",
        "encapsulation",
        "encryption",
        "hashing",
        "inheritance",
        "interface",
        "kernel",
        "linked list",
        "memory",
        "network",
        "operating system",
        "packet",
        "pointer",
        "polymorphism",
        "process",
        "protocol",
        "query",
        "queue",
        "recursion",
        "router",
        "scheduling",
        "socket",
        "sql",
        "stack",
        "tcp",
        "thread",
        "udp",
        "virtual memory",
    ],
    "EEE": [
        "alternating current",
        "capacitor",
        "circuit",
        "current",
        "direct current",
        "generator",
        "impedance",
        "inductance",
        "inductor",
        "motor",
        "ohm",
        "power factor",
        "reactance",
        "resistance",
        "resistor",
        "rotor",
        "stator",
        "transformer",
        "transmission",
        "voltage",
        "winding",
    ],
    "ECE": [
        "amplifier",
        "amplitude",
        "analog",
        "antenna",
        "bandwidth",
        "demodulation",
        "digital",
        "diode",
        "filter",
        "frequency",
        "gain",
        "microcontroller",
        "modulation",
        "noise",
        "oscillator",
        "sampling",
        "semiconductor",
        "signal",
        "transistor",
        "wavelength",
    ],
    "CIVIL": [
        "beam",
        "bending moment",
        "cement",
        "column",
        "compaction",
        "concrete",
        "deflection",
        "foundation",
        "load",
        "masonry",
        "reinforcement",
        "settlement",
        "shear",
        "slab",
        "soil",
        "steel",
        "strain",
        "stress",
        "surveying",
        "truss",
    ],
    "MECHANICAL": [
        "combustion",
        "compressor",
        "entropy",
        "enthalpy",
        "friction",
        "gear",
        "heat transfer",
        "kinematics",
        "lubrication",
        "machining",
        "piston",
        "pressure",
        "pump",
        "thermodynamics",
        "torque",
        "turbine",
        "velocity",
        "vibration",
        "viscosity",
        "welding",
    ],
}


# ============================================================================
# DOMAIN ADJUSTMENTS - Similarity multipliers per stream
# ============================================================================

# "technical": question phrased with stream vocabulary (embedding path only)
# "conceptual": everything else, and always on the manual path
DOMAIN_ADJUSTMENTS: Final[Dict[str, Dict[str, float]]] = {
    "CSE": {"technical": 1.08, "conceptual": 1.05},
    "EEE": {"technical": 1.00, "conceptual": 0.95},
    "ECE": {"technical": 1.02, "conceptual": 0.98},
    "CIVIL": {"technical": 1.00, "conceptual": 0.97},
    "MECHANICAL": {"technical": 1.03, "conceptual": 0.98},
}

# Aliases used by the original question banks (MECH.json, "Mechanical")
DOMAIN_ALIASES: Final[Dict[str, str]] = {
    "MECH": "MECHANICAL",
}


# ============================================================================
# FEEDBACK - One sentence per classification
# ============================================================================

FEEDBACK_MESSAGES: Final[Dict[str, str]] = {
    "Excellent": "Excellent answer that covers the key concepts of the model answer.",
    "Good": "Good answer; most key concepts are present.",
    "Average": "Average answer; several key concepts are missing or unclear.",
    "Below Average": "Below average answer; it only partially addresses the question.",
    "Poor": "Poor answer with little overlap with the expected content.",
    "Very Poor": "Very little of the expected content was found in the answer.",
    "No Answer": "No answer was provided.",
    "Error": "The answer could not be evaluated automatically and needs manual review.",
}


# ============================================================================
# SELF-TEST - Fixed sentences embedded after model load
# ============================================================================

SELF_TEST_SENTENCES: Final[tuple[str, str]] = (
    "The processor executes instructions stored in memory.",
    "Instructions held in memory are executed by the CPU.",
)
