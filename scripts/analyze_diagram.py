import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
from typing import List, Optional
from dotenv import load_dotenv
from diagramscholar.config import get_settings, configure_logging
from diagramscholar.errors import DiagramScholarError
from diagramscholar.formatter import format_text, render_text
from diagramscholar.image_input import load_image
from diagramscholar.pipeline import DiagramAnalysisPipeline
from diagramscholar.schemas import AnalysisResult
from diagramscholar.session import option_label

# Load environment variables
load_dotenv()


def format_report(result: AnalysisResult) -> str:
    """Plain-text report: title, explanation, relationship detail and the quiz with answers."""
    lines = [result.title, "=" * len(result.title), ""]
    lines.append(render_text(format_text(result.explanation)))
    lines += ["", "Key Relationship Detail", "-" * 23, result.relationshipDescription, ""]
    lines += ["Quiz", "-" * 4]
    for n, q in enumerate(result.quiz, start=1):
        lines.append(f"{n}. {q.question}")
        for i, option in enumerate(q.options):
            marker = "*" if i == q.correctAnswerIndex else " "
            lines.append(f"  {marker} {option_label(i)}. {option}")
        lines.append(f"    Answer: {option_label(q.correctAnswerIndex)}. {q.explanation}")
        lines.append("")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Explain a technical diagram and print a practice quiz.")
    parser.add_argument("image", help="Path to the diagram image (PNG, JPG, WEBP, GIF)")
    parser.add_argument("--question", "-q", help="Ask the tutor a follow-up question about the diagram")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        with open(args.image, "rb") as f:
            data = f.read()
    except OSError as e:
        print(f"❌ Could not read {args.image}: {e}")
        return 1

    try:
        image = load_image(data, os.path.basename(args.image), max_bytes=settings.max_upload_bytes)
        pipeline = DiagramAnalysisPipeline(api_key=settings.api_key, model=settings.model,
                                           quiz_size=settings.quiz_size)
        result = pipeline.analyze_image(image)
        print(format_report(result))
        if args.question:
            print(f"Q: {args.question}")
            print(f"A: {pipeline.ask_tutor(image, args.question)}")
    except DiagramScholarError as e:
        print(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
