from importlib.resources import files
import json
import yaml

def read_resource(path: str) -> str:
    return files("tic_converter.schemas").joinpath(path).read_text(encoding="utf-8")

def load_yaml_resource(path: str) -> dict:
    return yaml.safe_load(read_resource(path))

def load_json_resource(path: str) -> dict:
    return json.loads(read_resource(path))

LAYOUT = load_yaml_resource("layout.yaml")
DOCUMENT = LAYOUT["document"]
