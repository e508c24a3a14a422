import config


def test_demo_flag_defaults_off(settings_path):
    assert not settings_path.exists()
    assert config.get_use_all_entries_if_demo_data_present() is False


def test_demo_flag_round_trips(settings_path):
    config.set_use_all_entries_if_demo_data_present(True)
    assert config.get_use_all_entries_if_demo_data_present() is True
    config.set_use_all_entries_if_demo_data_present(False)
    assert config.get_use_all_entries_if_demo_data_present() is False


def test_unreadable_settings_are_ignored(settings_path):
    settings_path.write_text("{not json")
    assert config.get_use_all_entries_if_demo_data_present() is False


def test_clear_settings(settings_path):
    config.set_use_all_entries_if_demo_data_present(True)
    config.clear_settings()
    assert not settings_path.exists()
    assert config.get_use_all_entries_if_demo_data_present() is False
