from propwrap import (
    FeatureSettings,
    InMemoryKeyValueStore,
    NoProjectionConfigured,
    ValueWrapper,
    WrapperBuilder,
    clamping,
    configure_settings_store,
)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("The simplest wrapper")
print("-" * 100)
print()

# Without a policy a wrapper just stores and returns the value.
demo = ValueWrapper("demo")
print(demo.value)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Clamping values")
print("-" * 100)
print()


# Owners keep wrappers as fields and expose them through ordinary properties.
class Scores:
    def __init__(self):
        self._math = clamping(0, 0, 150, projected=True, name="math_score")
        self._history = clamping(0, 0, 100, projected=True, name="history_score")

    @property
    def math_score(self):
        return self._math.value

    @math_score.setter
    def math_score(self, value):
        self._math.value = value

    @property
    def history_score(self):
        return self._history.value

    @history_score.setter
    def history_score(self, value):
        self._history.value = value


scores = Scores()
scores.history_score = 120
print(f"History score: {scores.history_score}")  # 100, clamped on read
print(f"Stored raw:    {scores._history.raw_value}")  # 120

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Projected values")
print("-" * 100)
print()

# The projection answers "is the raw value dangerously high" (above upper * 6 / 10).
scores.math_score = 80
scores.history_score = 80
print(f"Math 80 over threshold:    {scores._math.projected_value}")  # False, threshold 90
print(f"History 80 over threshold: {scores._history.projected_value}")  # True, threshold 60

# Wrappers without a projection refuse to produce one.
try:
    demo.get_projected()
except NoProjectionConfigured as e:
    print(f"No projection: {e}")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Store-backed settings")
print("-" * 100)
print()

# Install the process-wide settings store once at startup.
store = configure_settings_store(InMemoryKeyValueStore())

settings = FeatureSettings()
print(settings)  # both flags default to False
settings.is_foo_feature_enabled = True
print(settings)
print(f"Store entries: {store.keys()}")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Building wrappers")
print("-" * 100)
print()

log_on_change = lambda old, new: print(f"Volume changed from {old} to {new}")

volume = (
    WrapperBuilder()
    .initial(5)
    .clamped(0, 11)
    .over_threshold()
    .on_change(log_on_change)
    .named("volume")
    .build()
)
volume.value = 15  # triggers the callback with the raw values
print(f"Volume: {volume.value}, too loud: {volume.projected_value}")
