#!/usr/bin/env python3
"""
CLI tool for grading a file of descriptive answers.

Reads answer pairs from JSON, grades them with the AnswerEvaluator
(embedding model when available, manual scorer otherwise) and writes
the results plus a submission summary.

Usage:
    python scripts/grade_answers.py --input data/answers.json
    python scripts/grade_answers.py --input data/answers.json --output results.json --no-ai

Input format:
    Either a list of pairs or {"pairs": [...]}. Each pair accepts snake_case
    or camelCase keys:
        {"studentAnswer": "...", "modelAnswer": "...", "maxMarks": 10, "stream": "CSE"}

Output:
    {"results": [...], "summary": {...}} (camelCase), to --output or stdout
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

from exam_grader.application.services import AnswerEvaluator, EvaluatorSettings
from exam_grader.domain.grading.value_objects import EvaluationSummary

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Grade descriptive exam answers against model answers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Grade with the embedding model (falls back to manual if unavailable)
  python scripts/grade_answers.py --input data/answers.json

  # Manual scorer only, results to file
  python scripts/grade_answers.py --input data/answers.json --output results.json --no-ai
        """,
    )

    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to JSON file with answer pairs",
    )

    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file path for results (default: stdout)",
    )

    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Disable the embedding model (manual scorer only)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def load_pairs(path: Path) -> list:
    """
    Read answer pairs from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the JSON is not a list or {"pairs": [...]}
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("pairs")
    if not isinstance(data, list):
        raise ValueError('Expected a list of answer pairs or {"pairs": [...]}')
    return data


async def main(argv=None) -> int:
    """Main execution function. Returns the process exit code."""
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    load_dotenv()

    # Step 1: Load answer pairs
    logger.info(f"Loading answer pairs from {args.input}")
    try:
        pairs = load_pairs(args.input)
    except FileNotFoundError:
        logger.error(f"Input file not found: {args.input}")
        return 1
    except (ValueError, OSError) as e:
        logger.error(f"Failed to read answer pairs: {e}")
        return 1
    logger.info(f"Loaded {len(pairs)} answer pairs")

    # Step 2: Initialize evaluator
    settings = EvaluatorSettings.from_env()
    if args.no_ai:
        settings = replace(settings, enable_ai=False)

    evaluator = AnswerEvaluator(settings=settings)
    try:
        if not args.no_ai:
            logger.info("Initializing embedding model (this may take 10-30 seconds)...")
        await evaluator.initialize()

        # Step 3: Grade
        results = await evaluator.evaluate_batch(pairs)
    finally:
        evaluator.dispose()

    summary = EvaluationSummary.from_results(results)

    # Step 4: Output
    payload = {
        "results": [result.to_dict() for result in results],
        "summary": summary.model_dump(mode="json", by_alias=True),
    }
    output = json.dumps(payload, indent=2)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info(f"Results saved to {args.output}")
    else:
        print(output)

    print(
        f"\nTotal: {summary.total_marks}/{summary.total_max_marks} "
        f"({summary.percentage}%) - {summary.evaluation_type} evaluation, "
        f"{summary.requires_review} answer(s) need review",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
