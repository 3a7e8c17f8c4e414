"""Message classes for android_deploy_info.proto.

Built from a FileDescriptorProto at import time so the package does not
depend on a protoc run; keep in sync with android_deploy_info.proto.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_PACKAGE = "android_deploy_info"

_FIELD = descriptor_pb2.FieldDescriptorProto


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="android_deploy_info.proto",
        package=_PACKAGE,
        syntax="proto3",
    )

    artifact = file_proto.message_type.add(name="Artifact")
    artifact.field.add(
        name="exec_root_path",
        json_name="execRootPath",
        number=1,
        type=_FIELD.TYPE_STRING,
        label=_FIELD.LABEL_OPTIONAL,
    )

    deploy_info = file_proto.message_type.add(name="AndroidDeployInfo")
    for name, json_name, number, label in (
        ("merged_manifest", "mergedManifest", 1, _FIELD.LABEL_OPTIONAL),
        ("additional_merged_manifests", "additionalMergedManifests", 2, _FIELD.LABEL_REPEATED),
        ("apks_to_deploy", "apksToDeploy", 3, _FIELD.LABEL_REPEATED),
    ):
        deploy_info.field.add(
            name=name,
            json_name=json_name,
            number=number,
            type=_FIELD.TYPE_MESSAGE,
            type_name=f".{_PACKAGE}.Artifact",
            label=label,
        )
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())

DESCRIPTOR = _pool.FindFileByName("android_deploy_info.proto")

Artifact = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{_PACKAGE}.Artifact"))
AndroidDeployInfo = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{_PACKAGE}.AndroidDeployInfo")
)
