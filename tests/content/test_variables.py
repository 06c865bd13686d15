"""Tests for user personalization variables."""

from __future__ import annotations

import json

from content_wizard.content.variables import (
    UserVariables,
    check_for_negative_terms,
    enhance_prompt_with_variables,
    format_variables_for_prompt,
    get_negative_terms_array,
    load_user_variables,
)


class TestUserVariables:

    def test_negative_terms_are_split_and_lowercased(self):
        variables = UserVariables(negative_terms=" Hack , MILAGRE,, fácil ")

        assert get_negative_terms_array(variables) == ["hack", "milagre", "fácil"]

    def test_empty_variables_leave_prompt_unchanged(self):
        assert enhance_prompt_with_variables("PROMPT", UserVariables()) == "PROMPT"

    def test_blank_values_are_ignored(self):
        formatted = format_variables_for_prompt(UserVariables(tone="   "))

        assert formatted.has_variables is False

    def test_block_is_appended(self):
        variables = UserVariables(tone="Direto", niche="Produtividade", negative_terms="hack")

        prompt = enhance_prompt_with_variables("PROMPT", variables)

        assert prompt.startswith("PROMPT\n\n")
        assert "• Tom de Voz: Direto" in prompt
        assert "• Nichos de Atuação: Produtividade" in prompt
        assert "Termos Proibidos" not in prompt

    def test_check_for_negative_terms(self):
        variables = UserVariables(negative_terms="hack, milagre")

        assert check_for_negative_terms("O HACK que ninguém conta", variables) == ["hack"]


class TestLoadUserVariables:

    def test_missing_file(self, tmp_path):
        assert load_user_variables(tmp_path / "nope.yaml") == UserVariables()
        assert load_user_variables(None) == UserVariables()

    def test_yaml_with_nested_block(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text(
            "variables:\n  tone: Direto\n  targetAudience: Freelancers\n",
            encoding="utf-8",
        )

        variables = load_user_variables(path)

        assert variables.tone == "Direto"
        assert variables.target_audience == "Freelancers"

    def test_json_file(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"preferredCTAs": "Comenta QUERO"}), encoding="utf-8")

        assert load_user_variables(path).preferred_ctas == "Comenta QUERO"
