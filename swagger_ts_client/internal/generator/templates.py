class Templates:
    """Шаблоны TypeScript для генерации файлов"""

    type_file = "type.ts"
    index_file = "index.ts"

    types_import = "import {{ {names} }} from './type';"

    request_call = 'return request("{method}", "{path}", {call_args});'

    index_export = "export {{ {name} }} from './{name}';"

    # Встроенный generic Map«K,V» не разбирается, а объявляется напрямую
    map_alias = "export type {name} = {{ [key: string]: {value} }};"

    special_generics = ("Map",)


templates = Templates()
