import sys
sys.path.insert(0, '..')

import io
import json
from jsonreader import DepthExtractor, Tokenizer, TokenHandler


def make_document(count: int) -> bytes:
    records = [
        {"id": i, "user": f"user-{i}", "tags": ["a", "b"], "note": "quote \" and ] inside"}
        for i in range(count)
    ]
    return json.dumps({"Records": records}).encode("utf-8")


class KeyCounter(TokenHandler):
    def __init__(self):
        self.counts = {}

    def on_key(self, key):
        self.counts[key] = self.counts.get(key, 0) + 1


document = make_document(1000)

# Each record is cut out as raw bytes and decoded on its own
for chunk in DepthExtractor(io.BytesIO(document), 2):
    record = json.loads(chunk)
    if record["id"] % 250 == 0:
        print(f"record {record['id']}: {chunk[:60]!r}...")

counter = KeyCounter()
Tokenizer(io.BytesIO(document)).parse(counter)
print(counter.counts)
