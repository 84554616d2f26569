"""Configuration settings for hand simulation."""

from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml


@dataclass
class SamplingConfig:
    """Sampling configuration."""

    num_hands: int = 1_000_000
    workers: int | None = None  # None = os.cpu_count()
    chunk_size: int = 10_000  # Deck shuffles per worker task
    seed: int | None = None


@dataclass
class OutputConfig:
    """Output and logging configuration."""

    plots_dir: str = "plots"
    csv_path: str | None = None
    log_file: str | None = None
    log_level: str = "INFO"
    show_progress: bool = False


@dataclass
class Config:
    """Complete configuration."""

    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: str | Path) -> Config:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    config = Config()

    if "sampling" in data:
        config.sampling = SamplingConfig(**data["sampling"])
    if "output" in data:
        config.output = OutputConfig(**data["output"])

    return config


def save_config(config: Config, path: str | Path) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "sampling": asdict(config.sampling),
        "output": asdict(config.output),
    }

    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

