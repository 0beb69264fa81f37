"""Unit tests for EstimatorConfig."""

import dataclasses

import pytest

from attitude_estimation import AxisRestriction, EstimatorConfig


class TestEstimatorConfig:
    """Tests for EstimatorConfig."""

    def test_defaults(self):
        """Test default constants."""
        config = EstimatorConfig()
        assert config.measurement_noise == 0.03
        assert config.angle_process_noise == 0.001
        assert config.bias_process_noise == 0.003
        assert config.complementary_gyro_weight == 0.93
        assert config.complementary_accel_weight == pytest.approx(0.07)
        assert config.drift_limit_deg == 180.0
        assert config.gimbal_threshold_deg == 90.0
        assert config.restricted_axis is AxisRestriction.PITCH
        assert config.gyro_sensitivity_lsb_per_dps == 131.0
        assert config.timestamp_wrap_bits is None

    def test_from_yaml(self, estimator_params_path):
        """Test loading the shipped YAML file."""
        config = EstimatorConfig.from_yaml(str(estimator_params_path))
        assert config == EstimatorConfig()

    def test_from_yaml_partial_keeps_defaults(self, tmp_path):
        """Test that missing keys fall back to defaults."""
        path = tmp_path / 'estimator.yaml'
        path.write_text("restricted_axis: roll\nmeasurement_noise: 0.05\n")

        config = EstimatorConfig.from_yaml(str(path))

        assert config.restricted_axis is AxisRestriction.ROLL
        assert config.measurement_noise == 0.05
        assert config.angle_process_noise == 0.001

    def test_from_yaml_unknown_key_raises(self, tmp_path):
        """Test that typos in the YAML file are reported."""
        path = tmp_path / 'estimator.yaml'
        path.write_text("measurment_noise: 0.05\n")

        with pytest.raises(ValueError, match="Unknown estimator parameters"):
            EstimatorConfig.from_yaml(str(path))

    def test_from_yaml_missing_file_raises(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            EstimatorConfig.from_yaml(str(tmp_path / 'missing.yaml'))

    def test_restricted_axis_string(self):
        """Test that axis names are converted to AxisRestriction."""
        config = EstimatorConfig(restricted_axis='ROLL')
        assert config.restricted_axis is AxisRestriction.ROLL

    def test_invalid_restricted_axis_raises(self):
        """Test that unknown axis names are rejected."""
        with pytest.raises(ValueError, match="restricted_axis must be"):
            EstimatorConfig(restricted_axis='yaw')

    @pytest.mark.parametrize('field,value', [
        ('measurement_noise', 0.0),
        ('angle_process_noise', -0.1),
        ('bias_process_noise', -0.1),
        ('complementary_gyro_weight', 1.0),
        ('drift_limit_deg', -180.0),
        ('gimbal_threshold_deg', 0.0),
        ('gyro_sensitivity_lsb_per_dps', 0.0),
        ('timestamp_wrap_bits', 0),
    ])
    def test_invalid_values_raise(self, field, value):
        """Test parameter validation."""
        with pytest.raises(ValueError, match=field):
            EstimatorConfig(**{field: value})

    def test_frozen(self):
        """Test that configuration is immutable."""
        config = EstimatorConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.measurement_noise = 0.1
