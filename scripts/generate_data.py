from provider_wellness.sample_content import build_and_save_sample_content


def main() -> None:
    """Write the bundled sample content documents as static JSON files."""
    build_and_save_sample_content(output_dir="data")
    print("Generated data/providers.json, data/crisis.json and data/organization.json")


if __name__ == "__main__":
    main()
