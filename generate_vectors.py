import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from lxml import etree

from wssec.builder import build_timestamp
from wssec.serialization import WSSE_NS, WSU_NS, timestamp_to_dict, timestamp_to_element

# Fixed instant so vectors are reproducible
NOW = datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

OUTPUT_DIR = Path(__file__).parent / "vectors"

VECTORS = {
    "valid_timestamp": 300,
    "no_expires_timestamp": 0,
    "expired_timestamp": -1,
}


def security_header(timestamp_element):
    header = etree.Element(etree.QName(WSSE_NS, "Security"), nsmap={"wsse": WSSE_NS, "wsu": WSU_NS})
    header.append(timestamp_element)
    return header


def main(output_dir: Path = OUTPUT_DIR):
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for name, ttl in VECTORS.items():
        print(f"Generating {name} (ttl={ttl})...")
        token = build_timestamp(ttl, NOW)

        with open(output_dir / f"{name}.json", "w") as f:
            json.dump(timestamp_to_dict(token), f, indent=2)
            f.write("\n")

        header = security_header(timestamp_to_element(token, wsu_id=f"TS-{name}"))
        with open(output_dir / f"{name}.xml", "wb") as f:
            f.write(etree.tostring(header, pretty_print=True, xml_declaration=True, encoding="UTF-8"))

    print("Done.")


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else OUTPUT_DIR)
