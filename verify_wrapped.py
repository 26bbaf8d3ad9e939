import json
from mal_wrapped.config import settings
from mal_wrapped.wrapped import Wrapped

# Create generator instance
wrapped = Wrapped(settings)

# Generate report
report = wrapped.generate()

# Print results
print(json.dumps(report.model_dump(), indent=2))
