"""
Basic usage example for pdfdeck.

Converts a text-based PDF to PPTX with the style profile in this folder.
"""

from pathlib import Path

from pdfdeck import DeckPipeline, load_profile


def main():
    profile = load_profile(Path(__file__).parent / "profile.yml")

    pipeline = DeckPipeline(
        profile=profile,
        save_intermediate=True,  # Save pages JSON for re-rendering
    )

    result = pipeline.process(
        pdf_path=Path("examples/sample.pdf"),
        output_dir=Path("output/sample"),
        progress_callback=lambda percent, message: None,
    )

    print("\n✓ Conversion complete!")
    print(f"  PPTX: {result['pptx']}")
    print(f"  Pages JSON: {result['pages']}")
    print(f"  Source title: {result['metadata'].title}")


if __name__ == "__main__":
    main()
