from __future__ import annotations

from hookify.generation.flavors.request import AXIOS_DEPENDENCIES
from hookify.generation.flavors.swr import SWR_DEPENDENCIES
from hookify.generation.imports import ImportRef, ImportSet, render_imports, used_dependency_imports
from hookify.generation.profile import GenerationProfile

PROFILE = GenerationProfile(has_awaited_type=True, allow_synthetic_default_imports=True)


class TestImportSet:
    def test_unions_by_symbol_identity(self) -> None:
        imports = ImportSet()
        imports.update([ImportRef(name="Pet"), ImportRef(name="Error"), ImportRef(name="Pet")])
        imports.add(ImportRef(name="Pet", specifier="./other"))
        assert list(imports) == [
            ImportRef(name="Pet"),
            ImportRef(name="Error"),
            ImportRef(name="Pet", specifier="./other"),
        ]
        assert len(imports) == 3
        assert ImportRef(name="Error") in imports


class TestUsedDependencyImports:
    def test_selects_exports_present_in_code(self) -> None:
        code = "const query = useSWR<Awaited<ReturnType<typeof swrFn>>, TError>(swrKey, swrFn, swrOptions);"
        refs = used_dependency_imports(SWR_DEPENDENCIES, code)
        assert refs == [ImportRef(name="useSWR", specifier="swr", default=True, values=True)]

    def test_matches_whole_words_only(self) -> None:
        refs = used_dependency_imports(AXIOS_DEPENDENCIES, "type AxiosErrorLike = AxiosResponse<string>;")
        assert [ref.name for ref in refs] == ["AxiosResponse"]


class TestRenderImports:
    def test_groups_per_module(self) -> None:
        refs = [
            ImportRef(name="Pet"),
            ImportRef(name="axios", specifier="axios", default=True, values=True),
            ImportRef(name="AxiosResponse", specifier="axios"),
            ImportRef(name="Error"),
        ]
        assert render_imports(refs, PROFILE, AXIOS_DEPENDENCIES) == [
            "import type { Error, Pet } from './model';",
            "import axios, { AxiosResponse } from 'axios';",
        ]

    def test_namespace_import_without_synthetic_default(self) -> None:
        profile = GenerationProfile(has_awaited_type=True, allow_synthetic_default_imports=False)
        refs = [
            ImportRef(name="axios", specifier="axios", default=True, values=True),
            ImportRef(name="AxiosError", specifier="axios"),
        ]
        assert render_imports(refs, profile, AXIOS_DEPENDENCIES) == [
            "import * as axios from 'axios';",
            "import type { AxiosError } from 'axios';",
        ]

    def test_non_synthetic_default_stays_default(self) -> None:
        profile = GenerationProfile(has_awaited_type=True, allow_synthetic_default_imports=False)
        refs = [ImportRef(name="useSWR", specifier="swr", default=True, values=True)]
        assert render_imports(refs, profile, SWR_DEPENDENCIES) == ["import useSWR from 'swr';"]

    def test_value_imports_are_not_type_only(self) -> None:
        refs = [
            ImportRef(name="customInstance", specifier="./mutator.ts", values=True),
            ImportRef(name="ErrorType", specifier="./mutator.ts"),
        ]
        assert render_imports(refs, PROFILE) == ["import { ErrorType, customInstance } from './mutator.ts';"]

    def test_custom_models_specifier(self) -> None:
        assert render_imports([ImportRef(name="Pet")], PROFILE, models_specifier="../model") == [
            "import type { Pet } from '../model';"
        ]
