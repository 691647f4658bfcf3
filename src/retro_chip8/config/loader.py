import yaml
from typing import Dict, Any, Optional
from .models import MachineConfig, DisplayConfig, DEFAULT_KEYMAP

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> MachineConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")
        defaults = MachineConfig()

        display_data = self._parse_section(data, "display")
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", defaults.display.scale)),
            foreground=str(display_data.get("foreground", defaults.display.foreground)),
            background=str(display_data.get("background", defaults.display.background)),
        )
        if display.scale <= 0:
            raise ValueError(f"Display scale must be positive: {display.scale}")

        # キーマップは既定値に上書きマージする
        keymap = dict(DEFAULT_KEYMAP)
        for host_key, chip_key in self._parse_section(data, "keymap").items():
            value = self._parse_int(chip_key)
            if not 0x0 <= value <= 0xF:
                raise ValueError(f"Keymap entry '{host_key}' maps to invalid key {value:#x}")
            # 1文字のキー名は大文字に正規化する（"q" と "Q" を同一視）
            name = str(host_key)
            keymap[name.upper() if len(name) == 1 else name] = value

        config = MachineConfig(
            load_address=self._parse_int(data.get("load_address", defaults.load_address)),
            instructions_per_frame=self._parse_int(data.get("instructions_per_frame", defaults.instructions_per_frame)),
            frame_rate=self._parse_int(data.get("frame_rate", defaults.frame_rate)),
            seed=self._parse_optional_int(data.get("seed")),
            display=display,
            keymap=keymap,
        )
        if config.instructions_per_frame <= 0 or config.frame_rate <= 0:
            raise ValueError("instructions_per_frame and frame_rate must be positive integers.")
        return config

    # @intent:pre-condition ネストしたセクションは省略またはマッピングである必要があります。
    def _parse_section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
        return section

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
