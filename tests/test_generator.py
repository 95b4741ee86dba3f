"""
Тесты для генератора TypeScript сервисов
"""

import logging

import pytest

from swagger_ts_client.config import GeneratorConfig
from swagger_ts_client.generator import ApiServiceGenerator, generate_services

REQUEST_IMPORT = "import { request } from '@/utils/fetch';"

PET_SPEC = {
    "swagger": "2.0",
    "tags": [{"name": "pet", "description": "Everything about your Pets"}],
    "definitions": {
        "Pet": {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "name": {"type": "string", "required": True},
            },
        }
    },
    "paths": {
        "/pet/{id}": {
            "get": {
                "tags": ["pet"],
                "summary": "Find pet by ID",
                "operationId": "getPetById",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "type": "integer"}
                ],
                "responses": {
                    "200": {"description": "OK", "schema": {"$ref": "#/definitions/Pet"}}
                },
            },
            "delete": {
                "tags": ["pet"],
                "operationId": "deletePet",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "type": "integer"}
                ],
                "responses": {"400": {"description": "Invalid ID"}},
            },
        }
    },
}


def _file(project, name):
    code_file = project.get_file(name)
    assert code_file is not None, f"Нет файла {name}"
    return str(code_file)


class TestServiceGeneration:
    """Тесты основной функциональности генератора"""

    def test_generated_files(self):
        """Тест набора сгенерированных файлов"""
        project = generate_services(PET_SPEC, REQUEST_IMPORT)

        assert [f.file_name for f in project.files] == [
            "type.ts",
            "PetService.ts",
            "index.ts",
        ]

    def test_types_file(self):
        """Тест содержимого type.ts"""
        project = generate_services(PET_SPEC, REQUEST_IMPORT)

        assert _file(project, "type.ts") == (
            "export interface Pet {\n" "  id?: number;\n" "  name: string;\n" "}\n"
        )

    def test_service_file(self):
        """Тест сервиса для тега pet"""
        project = generate_services(PET_SPEC, REQUEST_IMPORT)
        service = _file(project, "PetService.ts")

        assert service.startswith(
            "import { Pet } from './type';\n" + REQUEST_IMPORT + "\n\n"
        )
        assert "// Everything about your Pets\nexport class PetService {" in service
        assert "  // Find pet by ID\n" in service
        assert "  public static getPetById(id: number): Promise<Pet> {\n" in service
        assert (
            '    return request("GET", "/pet/{id}", {id},null,null,null,null);\n'
            in service
        )
        assert "public static deletePet(id: number): Promise<void> {" in service
        assert 'request("DELETE", "/pet/{id}"' in service
        assert service.endswith("  }\n}\n")

    def test_index_file(self):
        """Тест index.ts"""
        project = generate_services(PET_SPEC, REQUEST_IMPORT)

        assert _file(project, "index.ts") == (
            "export { PetService } from './PetService';\n"
        )

    def test_page_header(self):
        """Тест заголовка в начале каждого файла"""
        header = "// Сгенерировано автоматически, не редактировать"
        project = generate_services(PET_SPEC, REQUEST_IMPORT, page_header=header)

        for code_file in project.files:
            assert str(code_file).startswith(header + "\n\n")

    def test_api_rename(self):
        """Тест переименования методов"""
        project = generate_services(
            PET_SPEC, REQUEST_IMPORT, api_rename=lambda name: name.replace("get", "fetch")
        )
        service = _file(project, "PetService.ts")

        assert "public static fetchPetById(" in service
        assert "public static deletePet(" in service

    def test_config_facade(self):
        """Тест генерации через конфигурацию со словарем apiRename"""
        config = GeneratorConfig(
            request_import_expression=REQUEST_IMPORT,
            api_rename={"deletePet": "removePet"},
        )
        project = ApiServiceGenerator(PET_SPEC, config).generate()

        assert "public static removePet(id: number)" in _file(project, "PetService.ts")

    def test_no_definitions(self):
        """Тест документа без definitions - нет импорта типов"""
        spec = {
            "paths": {"/ping": {"get": {"tags": ["health"], "operationId": "ping"}}}
        }
        project = generate_services(spec, REQUEST_IMPORT)
        service = _file(project, "HealthService.ts")

        assert "from './type'" not in service
        assert service.startswith(REQUEST_IMPORT)
        assert _file(project, "type.ts") == "\n"


class TestNaming:
    """Тесты именования сервисов и методов"""

    def test_tag_to_service_name(self):
        """Тест PascalCase имени сервиса"""
        spec = {
            "paths": {
                "/a": {"get": {"tags": ["store-order api"], "operationId": "a"}},
            }
        }

        project = generate_services(spec, REQUEST_IMPORT)

        assert project.get_file("StoreOrderApiService.ts") is not None

    def test_tag_collision(self, caplog):
        """Тест тегов, дающих одинаковое имя сервиса"""
        spec = {
            "paths": {
                "/a": {"get": {"tags": ["pet-store"], "operationId": "a"}},
                "/b": {"get": {"tags": ["pet store"], "operationId": "b"}},
            }
        }

        with caplog.at_level(logging.WARNING):
            project = generate_services(spec, REQUEST_IMPORT)

        names = [f.file_name for f in project.files]
        assert "PetStoreService.ts" in names
        assert "PetStore2Service.ts" in names
        assert "export { PetStore2Service } from './PetStore2Service';" in _file(
            project, "index.ts"
        )
        assert "PetStore2Service" in caplog.text

    def test_duplicate_method_names(self):
        """Тест одинаковых operationId внутри тега"""
        spec = {
            "paths": {
                "/a": {"get": {"tags": ["t"], "operationId": "load"}},
                "/b": {"get": {"tags": ["t"], "operationId": "load"}},
            }
        }

        service = _file(generate_services(spec, REQUEST_IMPORT), "TService.ts")

        assert "public static load(" in service
        assert "public static load2(" in service

    @pytest.mark.parametrize(
        "operation_id, expected",
        [("find-pets", "findPets"), ("listPets", "listPets")],
    )
    def test_method_identifier(self, operation_id, expected):
        """Тест имени метода из operationId"""
        spec = {"paths": {"/a": {"get": {"tags": ["t"], "operationId": operation_id}}}}

        service = _file(generate_services(spec, REQUEST_IMPORT), "TService.ts")

        assert f"public static {expected}(" in service

    def test_reserved_parameter_name(self):
        """Тест параметра с именем зарезервированного слова"""
        spec = {
            "paths": {
                "/a": {
                    "get": {
                        "tags": ["t"],
                        "operationId": "list",
                        "parameters": [
                            {"name": "default", "in": "query", "type": "string"}
                        ],
                    }
                }
            }
        }

        service = _file(generate_services(spec, REQUEST_IMPORT), "TService.ts")

        assert "public static list(default_?: string): Promise<void> {" in service
        assert 'request("GET", "/a", null,{default: default_},null,null,null);' in service


class TestComments:
    """Тесты комментариев из описаний тегов и summary"""

    def test_multiline_description_and_summary(self):
        """Тест: каждая строка многострочного текста закомментирована"""
        spec = {
            "tags": [{"name": "pet", "description": "Pets API\nsecond line\n"}],
            "paths": {
                "/pets": {
                    "get": {
                        "tags": ["pet"],
                        "operationId": "listPets",
                        "summary": "List pets\n\nwith paging",
                    }
                }
            },
        }

        service = _file(generate_services(spec, REQUEST_IMPORT), "PetService.ts")

        assert "// Pets API\n// second line\nexport class PetService {" in service
        assert (
            "  // List pets\n  //\n  // with paging\n  public static listPets("
            in service
        )
        for line in service.splitlines():
            assert not line.strip().startswith(("second", "with"))


class TestGenericTypes:
    """Тесты generic-определений"""

    def test_generic_response(self):
        """Тест ответа со ссылкой на generic-определение"""
        spec = {
            "definitions": {
                "Pet": {"type": "object", "properties": {"id": {"type": "integer"}}},
                "Result«List«Pet»»": {
                    "type": "object",
                    "properties": {
                        "data": {"type": "array", "items": {"$ref": "#/definitions/Pet"}}
                    },
                },
                "Result«Pet»": {
                    "type": "object",
                    "properties": {"data": {"$ref": "#/definitions/Pet"}},
                },
            },
            "paths": {
                "/pets": {
                    "get": {
                        "tags": ["pet"],
                        "operationId": "listPets",
                        "responses": {
                            "200": {
                                "description": "OK",
                                "schema": {"$ref": "#/definitions/Result«List«Pet»»"},
                            }
                        },
                    }
                }
            },
        }

        project = generate_services(spec, REQUEST_IMPORT)
        types = _file(project, "type.ts")
        service = _file(project, "PetService.ts")

        assert types.count("export interface Result<T0>") == 1
        assert "import { Pet, Result } from './type';" in service
        assert "listPets(): Promise<Result<Array<Pet>>>" in service
