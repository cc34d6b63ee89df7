"""Helper script to create a .env file interactively."""

import secrets
from pathlib import Path


def _ask(prompt: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    value = input(f"{prompt}{suffix}: ").strip()
    return value or default


def create_env_file():
    """Interactive script to create .env with database, session and AI settings."""
    print("=" * 60)
    print("AD VARIANTS STUDIO - Environment Setup")
    print("=" * 60)
    print()

    env_path = Path(".env")

    if env_path.exists():
        print("[WARN] .env file already exists!")
        overwrite = input("Do you want to overwrite it? (y/n): ").strip().lower()
        if overwrite != "y":
            print("Setup cancelled.")
            return

    dsn = _ask("Database DSN", "sqlite:///./data/studio.db")
    storage = _ask("Storage provider (local/supabase)", "local").lower()
    lines = [
        "# Database",
        f"DATABASE_DSN={dsn}",
        "",
        "# Sessions",
        f"SESSION_SECRET={secrets.token_urlsafe(32)}",
        "",
        "# Storage",
        f"STORAGE_PROVIDER={storage}",
    ]
    if storage == "supabase":
        lines.append(f"SUPABASE_URL={_ask('Supabase URL')}")
        lines.append(f"SUPABASE_SERVICE_ROLE_KEY={_ask('Supabase service role key')}")
        lines.append(f"SUPABASE_BUCKET={_ask('Supabase bucket', 'ad-variants')}")

    print("\n[INFO] Gemini powers copy, image and template generation.")
    print("   Get a key at: https://aistudio.google.com/apikey")
    gemini_key = _ask("Gemini API key (leave blank to skip)")
    lines += ["", "# Generative AI", f"GEMINI_API_KEY={gemini_key}"]

    text_provider = _ask("Copywriting provider (gemini/anthropic)", "gemini").lower()
    lines.append(f"TEXT_PROVIDER={text_provider}")
    if text_provider == "anthropic":
        key = _ask("Anthropic API key")
        if key and not key.startswith("sk-ant-"):
            print("[WARN] Anthropic keys usually start with 'sk-ant-'")
        lines.append(f"ANTHROPIC_API_KEY={key}")

    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    print("\n[OK] .env file created successfully!")
    print(f"   Location: {env_path.absolute()}")
    print()
    print("Next steps:")
    print("1. Install dependencies: pip install -e .")
    print("2. Apply migrations: alembic upgrade head (or studio-seed --create-tables for SQLite)")
    print("3. Seed demo data: studio-seed")
    print("4. Start the API: studio-server")
    print()


if __name__ == "__main__":
    try:
        create_env_file()
    except KeyboardInterrupt:
        print("\n\nSetup cancelled by user.")
