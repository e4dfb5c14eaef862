from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from invoice_builder.core.paths import default_export_dir, settings_path

logger = logging.getLogger(__name__)

# Path to the settings.json (runtime-aware)
SETTINGS_PATH = settings_path()


@dataclass
class Settings:
	business_name: str = "DIAMOND PPF INDONESIA"
	# Optional absolute/relative path (or http(s) URL) to the round logo on the invoice
	logo_path: Optional[str] = "assets/logo.png"
	currency_code: str = "IDR"
	# Digit grouping convention used by format_currency
	locale: str = "id-ID"
	thank_you: str = "Thank You!"
	payment_title: str = "PAYMENT INFORMATION"
	payment_bank: str = "BCA -  A.N. Jeffrey"
	payment_account: str = "3880908226"
	# Folder for exported PDFs; if None, defaults to Documents/Invoices
	export_dir: Optional[str] = None
	# Oversampling factor used when rasterizing the preview
	raster_scale: float = 2.0
	page_format: str = "A4"
	# 0 waits for every image forever; >0 exports best-effort after the timeout
	image_timeout_ms: int = 0
	# Subtract the discount line from the displayed total
	subtract_discount: bool = False
	open_after_export: bool = True

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Settings":
		# Merge provided values over defaults, ignore unknown keys
		defaults = asdict(cls())
		merged: Dict[str, Any] = {**defaults, **{k: v for k, v in data.items() if k in defaults}}
		return cls(**merged)

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)

	def resolved_export_dir(self) -> Path:
		return Path(self.export_dir).expanduser() if self.export_dir else default_export_dir()


def _coerce_path(path: Optional[Union[str, Path]]) -> Path:
	return Path(path) if path is not None else SETTINGS_PATH


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
	"""
	Load settings from JSON (UTF-8). If the file is missing, write defaults and return them.
	"""
	p = _coerce_path(path)
	if not p.exists():
		settings = Settings()
		try:
			save_settings(settings, p)
		except OSError:
			logger.warning("Could not write default settings to %s", p)
		return settings

	try:
		with p.open("r", encoding="utf-8") as f:
			raw: Dict[str, Any] = json.load(f)
	except (json.JSONDecodeError, OSError):
		# If unreadable/corrupt, fall back to defaults (do not overwrite automatically)
		logger.warning("Settings file %s is unreadable; using defaults", p)
		return Settings()

	return Settings.from_dict(raw if isinstance(raw, dict) else {})


def save_settings(settings: Settings, path: Optional[Union[str, Path]] = None) -> None:
	"""Save settings to JSON (UTF-8), creating parent dirs if needed."""
	p = _coerce_path(path)
	p.parent.mkdir(parents=True, exist_ok=True)
	tmp = p.with_suffix(p.suffix + ".tmp")
	with tmp.open("w", encoding="utf-8", newline="\n") as f:
		json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
		f.write("\n")
	tmp.replace(p)
